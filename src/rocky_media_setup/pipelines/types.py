"""Pipeline type definitions."""

from dataclasses import dataclass, field

from rocky_media_setup.install import Component


@dataclass
class Pipeline:
    """An installer: an ordered list of components sharing one cache directory."""

    key: str
    title: str
    description: str  # initial consent question
    workdir: str  # default cache directory, relative to $HOME
    components: list[Component]
    notes: list[str] = field(default_factory=list)  # manual follow-up steps
    checks: list[str] = field(default_factory=list)  # post-install verify checks
    offer_prune: bool = False

    @property
    def terminal(self) -> Component:
        return self.components[-1]
