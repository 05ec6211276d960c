"""Runtime settings and the fixed text layout of the reports."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TextLayout:
    """
    Column constants of the long-form report.

    The defaults reproduce the OpenSSL `-text` layout: key material wraps at
    15 bytes per line, signatures at 18, each nesting level adds 4 spaces and
    the signature dump sits at 9 columns.
    """
    key_wrap: int = 15
    signature_wrap: int = 18
    extension_wrap: int = 15
    indent_step: int = 4
    signature_indent: int = 9


DEFAULT_LAYOUT = TextLayout()


@dataclass
class TextConfig:
    log_level: str = "WARNING"
    log_format: str = "console"
    layout: TextLayout = DEFAULT_LAYOUT

    @classmethod
    def from_env(cls) -> "TextConfig":
        """Load settings from environment variables with sensible defaults."""
        return cls(
            log_level=os.getenv("CERTINFO_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("CERTINFO_LOG_FORMAT", "console").lower(),
        )
