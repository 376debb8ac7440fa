"""Configuration helpers shared by the script builder and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .builder import ScriptBuilder
from .dialects import get_dialect

__all__ = [
    "GENERATED_BY_HEADER",
    "INCUBATING_APIS_WARNING",
    "ScriptConfig",
    "create_builder",
]


GENERATED_BY_HEADER = "This file was generated by the Gradle 'init' task."

INCUBATING_APIS_WARNING = "This project uses @Incubating APIs which are subject to change."


@dataclass(slots=True)
class ScriptConfig:
    """Settings describing one generated script.

    Attributes
    ----------
    dsl:
        Name of the output dialect, one of the keys of
        :data:`scriptforge.dialects.DIALECTS`.
    file_name:
        Base name of the generated file, without extension.
    use_incubating_apis:
        When ``True`` the header warns that the script relies on incubating
        APIs.
    """

    dsl: str = "groovy"
    file_name: str = "build"
    use_incubating_apis: bool = False

    @classmethod
    def from_dsl(
        cls,
        dsl: str,
        *,
        file_name: str = "build",
        use_incubating_apis: bool = False,
    ) -> "ScriptConfig":
        """Build a :class:`ScriptConfig`, normalising and validating ``dsl``."""

        normalized = get_dialect(dsl).name
        name = file_name.strip()
        if not name:
            raise ValueError("file name must not be empty")
        return cls(dsl=normalized, file_name=name, use_incubating_apis=use_incubating_apis)

    def header_lines(self) -> tuple[str, ...]:
        """Return the fixed lines that open the header comment."""

        if self.use_incubating_apis:
            return (GENERATED_BY_HEADER, "", INCUBATING_APIS_WARNING)
        return (GENERATED_BY_HEADER,)

    def file_path(self, directory: str | Path) -> Path:
        """Return the path of the generated script inside ``directory``."""

        extension = get_dialect(self.dsl).file_extension
        return Path(directory) / f"{self.file_name}.{extension}"


def create_builder(config: ScriptConfig) -> ScriptBuilder:
    """Return a :class:`ScriptBuilder` wired with the dialect and header of ``config``."""

    return ScriptBuilder(config.dsl, header=config.header_lines())
