"""Runtime settings for the command line front end.

Cryptographic parameters are fixed in the modules that use them; only I/O
behaviour is configurable here, through environment variables.
"""
import os
from typing import Mapping, NamedTuple, Optional

LOG_LEVEL_ENV = "E521_LOG_LEVEL"
OUTPUT_ENCODING_ENV = "E521_OUTPUT_ENCODING"
PASSPHRASE_ENV = "E521_PASSPHRASE"

LOG_LEVEL = "WARNING"
OUTPUT_ENCODING = "hex"

OUTPUT_ENCODINGS = ("hex", "raw")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(NamedTuple):
    log_level: str = LOG_LEVEL
    output_encoding: str = OUTPUT_ENCODING
    passphrase_env: str = PASSPHRASE_ENV


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environ (defaults to os.environ)."""
    if environ is None:
        environ = os.environ
    defaults = Settings()
    log_level = environ.get(LOG_LEVEL_ENV, defaults.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError("%s must be one of %s, got %r" % (LOG_LEVEL_ENV, ", ".join(LOG_LEVELS), log_level))
    output_encoding = environ.get(OUTPUT_ENCODING_ENV, defaults.output_encoding).lower()
    if output_encoding not in OUTPUT_ENCODINGS:
        raise ValueError("%s must be one of %s, got %r" % (OUTPUT_ENCODING_ENV, ", ".join(OUTPUT_ENCODINGS),
                                                          output_encoding))
    return Settings(log_level, output_encoding, defaults.passphrase_env)
