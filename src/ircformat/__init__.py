"""IRC text formatting engine: mIRC control codes to HTML or plain text."""

from loguru import logger

from ircformat.core.constants import OutputMode
from ircformat.core.errors import FormatConfigurationError, IrcFormatError, LinkPatternError
from ircformat.formatting import DEFAULT_URL_PATTERN, LinkDetector, to_html, to_plain_text
from ircformat.palette import ColorPalette

__version__ = "0.1.0"

# Library logging stays silent until an application enables it
logger.disable("ircformat")

__all__ = [
    "DEFAULT_URL_PATTERN",
    "ColorPalette",
    "FormatConfigurationError",
    "IrcFormatError",
    "LinkDetector",
    "LinkPatternError",
    "OutputMode",
    "__version__",
    "to_html",
    "to_plain_text",
]
