from dataclasses import dataclass
import enum
import logging
from pathlib import Path


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    if any(isinstance(h.formatter, ColorFormatter) for h in logging.root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


class IconError(Exception):
    """Base class for everything that aborts a generation run."""


class ManifestNotFound(IconError, FileNotFoundError):
    def __init__(self, path: Path):
        super().__init__(f"Couldn't find icon manifest at {path}")
        self.path = path


class ManifestParseError(IconError, ValueError):
    pass


class AssetNotFound(IconError, FileNotFoundError):
    def __init__(self, name: str, path: Path):
        super().__init__(f"Icon {name} not found at {path}")
        self.name = name
        self.path = path


class AssetReadError(IconError, OSError):
    def __init__(self, name: str, path: Path, reason: OSError):
        super().__init__(f"Couldn't read icon {name} at {path}: {reason}")
        self.name = name
        self.path = path


class NamingCollision(IconError):
    def __init__(self, first: str, second: str, message: str = ""):
        super().__init__(message or f"Icons {first} and {second} map to the same name")
        self.first = first
        self.second = second


class WriteError(IconError, OSError):
    pass


class ConfigDirNotFound(IconError):
    pass


class IconStyle(enum.Enum):
    OUTLINED = "outlined"
    ROUNDED = "rounded"
    SHARP = "sharp"

    @classmethod
    def parse(cls, tag: str) -> "IconStyle":
        try:
            return cls(tag)
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown icon style {tag!r} (expected one of {choices})") from None


@dataclass(frozen=True)
class IconRequest:
    name: str
    style: IconStyle = IconStyle.OUTLINED
    filled: bool = False

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Icon name must be a non-empty string (got {self.name!r})")
        if not isinstance(self.style, IconStyle):
            raise ValueError(f"Icon {self.name}: style must be an IconStyle")
        if not isinstance(self.filled, bool):
            raise ValueError(f"Icon {self.name}: filled must be a bool")

    def file_name(self) -> str:
        return f"{'filled-' if self.filled else ''}{self.style.value}.svg"

    def describe(self) -> str:
        return f"{self.name} ({'filled ' if self.filled else ''}{self.style.value})"


@dataclass(frozen=True)
class ResolvedAsset:
    request: IconRequest
    path: Path
