"""pyinfra deploy scripts, run with ``pyinfra @local <script>``."""
