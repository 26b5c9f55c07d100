"""
Configuration loader for PDF Scout.

Settings live in config/config.json, one JSON object per section. Every
field has a default, so a section (or the whole file) may be partial.
Relative paths are resolved against the project root, the directory
holding config/. The loaded Config is cached process-wide; call
reload_config() after editing the file.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError
from .logger import DEFAULT_FORMAT


CONFIG_ENV_VAR = "PDFSCOUT_CONFIG"

DEFAULT_COLOR_PALETTE = [
    "#ffff00",
    "#22c55e",
    "#3b82f6",
    "#f97316",
    "#ec4899",
    "#8b5cf6",
    "#06b6d4",
    "#f59e0b",
    "#14b8a6",
    "#a855f7",
]


@dataclass
class PathsConfig:
    """Where logs go and which corpus a bare search scans."""
    logs_directory: Path = Path("output/logs")
    default_corpus_directory: Path = Path("data")


@dataclass
class ExtractionConfig:
    """Text backends and corpus discovery filters."""
    primary_backend: str = "pypdf"
    fallback_backend: str = "pdfplumber"
    max_file_size_mb: int = 500
    supported_extensions: List[str] = field(default_factory=lambda: [".pdf"])
    follow_symlinks: bool = True


@dataclass
class SearchConfig:
    """Context window, worker pool size and highlight colours."""
    context_words: int = 100
    max_workers: Optional[int] = None
    default_color: str = DEFAULT_COLOR_PALETTE[0]
    color_palette: List[str] = field(default_factory=lambda: list(DEFAULT_COLOR_PALETTE))


@dataclass
class BibliographyConfig:
    """Zotero database file names and the library link format."""
    database_filename: str = "zotero.sqlite"
    citekey_database_filename: str = "better-bibtex.sqlite"
    library_link_template: str = "zotero://select/library/items/{key}"


@dataclass
class ExportConfig:
    report_title: str = "PDF Search Results"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = DEFAULT_FORMAT
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_level: Optional[str] = None


def _section(section_cls, raw):
    """Build a section dataclass from its JSON object, ignoring unknown keys."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config section for {section_cls.__name__} must be an object",
            {"value": raw}
        )
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{key: value for key, value in raw.items() if key in known})


@dataclass
class Config:
    """
    All configuration sections.

    Use get_config() rather than constructing one directly.
    """
    paths: PathsConfig = field(default_factory=PathsConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    bibliography: BibliographyConfig = field(default_factory=BibliographyConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Read and validate a config.json.

        Raises:
            ConfigurationError: The file is missing, is not valid JSON,
                or holds a value the search cannot run with.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        return cls.from_dict(data, config_path.resolve().parent.parent)

    @classmethod
    def from_dict(cls, data: dict, project_root: Path) -> "Config":
        """Build a Config from already-parsed JSON."""
        config = cls(
            paths=_section(PathsConfig, data.get("paths")),
            extraction=_section(ExtractionConfig, data.get("extraction")),
            search=_section(SearchConfig, data.get("search")),
            bibliography=_section(BibliographyConfig, data.get("bibliography")),
            export=_section(ExportConfig, data.get("export")),
            logging=_section(LoggingConfig, data.get("logging")),
            project_root=project_root
        )

        config.paths.logs_directory = config._absolute(config.paths.logs_directory)
        config.paths.default_corpus_directory = config._absolute(
            config.paths.default_corpus_directory
        )

        config._validate()
        return config

    def _absolute(self, path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project_root / path

    def _validate(self) -> None:
        """Reject values the search cannot run with."""
        if self.search.context_words < 0:
            raise ConfigurationError(
                "search.context_words must not be negative",
                {"context_words": self.search.context_words}
            )

        if self.search.max_workers is not None and self.search.max_workers < 1:
            raise ConfigurationError(
                "search.max_workers must be at least 1",
                {"max_workers": self.search.max_workers}
            )

        if not self.search.color_palette:
            raise ConfigurationError("search.color_palette must not be empty")

        if "{key}" not in self.bibliography.library_link_template:
            raise ConfigurationError(
                "bibliography.library_link_template must contain {key}",
                {"template": self.bibliography.library_link_template}
            )


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Return the process-wide Config, loading it on first use.

    Passing `config_path` always loads that file and replaces the
    cached instance.

    Raises:
        ConfigurationError: If no usable config file is found.
    """
    global _config_instance

    if config_path is not None:
        _config_instance = Config.from_file(config_path)
    elif _config_instance is None:
        _config_instance = Config.from_file(_find_config_file())

    return _config_instance


def reload_config(config_path: Path = None) -> Config:
    """Drop the cached Config and load it again."""
    global _config_instance
    _config_instance = None
    return get_config(config_path)


def _find_config_file() -> Path:
    """
    Locate config.json.

    `PDFSCOUT_CONFIG` wins when set; otherwise look for config/config.json
    in the working directory and each of its ancestors.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / "config" / "config.json"
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "No config/config.json found in the working directory or its parents",
        {"cwd": str(cwd)}
    )
