"""Installer pipelines available from the command line."""

from .drivers import ALSA_HDSPE, DEKTEC, TBSDTV
from .ffmpeg import FFMPEG_ALSA, FFMPEG_FULL
from .tools import ALSA_TOOLS_PIPELINE, HDSPECONF, TSDUCK
from .types import Pipeline

PIPELINES: dict[str, Pipeline] = {
    p.key: p
    for p in [
        FFMPEG_FULL,
        FFMPEG_ALSA,
        TBSDTV,
        DEKTEC,
        ALSA_HDSPE,
        HDSPECONF,
        ALSA_TOOLS_PIPELINE,
        TSDUCK,
    ]
}


def get_pipeline(key: str) -> Pipeline:
    """Look up a pipeline by key."""
    try:
        return PIPELINES[key]
    except KeyError:
        valid = ", ".join(PIPELINES)
        raise KeyError(f"Unknown installer '{key}'. Choose one of: {valid}") from None


__all__ = ["PIPELINES", "Pipeline", "get_pipeline"]
