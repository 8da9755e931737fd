"""
System constants that should never change.

These are technical/system values, not user preferences.
User-configurable values should go in config.yaml instead.
"""

VERBOSE_LOGGING_THRESHOLD = 2  # -vv enables debug logging with logger names

DEFAULT_ENCODER = "ffmpeg"
DEFAULT_PLAYER = "ffplay"
DEFAULT_DENOISER = "sox"
DEFAULT_SCRATCH_SUBDIRECTORY = "media_cutter"
DEFAULT_CANCEL_GRACE_SECONDS = 5.0

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT
