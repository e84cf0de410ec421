"""Layout reports describing a planned protocol layout.

This module turns an initialized PathResolver into rows that the CLI renders
as a table and that can be written to disk as JSON for emitters running in
another process.
"""

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field
from upath import UPath

from protolayout.exceptions import UninitializedStateError
from protolayout.languages import CodeLanguage
from protolayout.layout.resolver import PathResolver


class LayoutEntry(BaseModel):
    """Planned location of one protocol."""

    protocol_id: int
    declaration_name: str
    simple_name: str
    path: str = Field('', description='Assigned directory, slash-separated.')
    fold_group: str = ''
    absolute_paths: dict[str, str] = Field(default_factory=dict)


class LayoutReport(BaseModel):
    """Planned locations of every protocol of a generation run."""

    fold_protocol: bool = True
    entries: list[LayoutEntry] = Field(default_factory=list)

    @classmethod
    def from_resolver(
        cls,
        resolver: PathResolver,
        languages: Iterable[CodeLanguage],
        fold_protocol: bool = True,
    ) -> 'LayoutReport':
        """Collect one entry per registered protocol, in protocol id order."""
        if not resolver.is_initialized:
            raise UninitializedStateError('LayoutReport.from_resolver')

        languages = list(languages)
        entries = []
        for declaration in resolver.registry:
            protocol_id = declaration.protocol_id
            entries.append(
                LayoutEntry(
                    protocol_id=protocol_id,
                    declaration_name=declaration.declaration_name,
                    simple_name=declaration.name,
                    path=resolver.get_protocol_path(protocol_id),
                    fold_group=resolver.get_fold_group(protocol_id),
                    absolute_paths={
                        language.value: resolver.absolute_path(protocol_id, language)
                        for language in languages
                    },
                )
            )
        return cls(fold_protocol=fold_protocol, entries=entries)


class LayoutReportWriter:
    """Writes layout reports as JSON.

    Example:
        >>> writer = LayoutReportWriter()
        >>> writer.write(report, Path('layout.json'))
    """

    def write(self, report: LayoutReport, path: UPath | Path | str) -> None:
        """Write the report to path, creating parent directories as needed.

        Raises:
            OSError: If the file cannot be written.
        """
        path = UPath(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.model_dump_json(indent=2) + '\n', encoding='utf-8')
