"""
Document builder for borr.

Folds the lines of a language file into a TranslationDocument. The builder
is a small state machine whose only state is the current section (None while
in root scope, before the first section header).

Per line:
1. empty and comment lines are skipped
2. inline comments are stripped
3. a section header switches the current section
4. anything that is not a translation is skipped silently
5. in root scope only lang_id, lang_desc and lang_ver are recognized
6. inside a section the value is stored under the field's key; a repeated
   multi-line field appends a new line, any other repeat overwrites

Parsing is permissive: malformed lines never abort it. The only fatal error
is a malformed lang_ver value. In strict mode the ignored lines are collected
as warnings on the document; the parsed data is the same either way.

Usage:
    document = document_parse(text)
    document = document_fromFile("en_GB.borr")
    text = document_serialize(document)
"""

from pathlib import Path
from typing import Final, Self

from borr.config.settings import appsettings
from borr.lib.classifier import (
    field_isMultiline,
    field_keyGet,
    line_classify,
    line_commentsStrip,
    line_sectionMatch,
    line_translationMatch,
)
from borr.lib.document import TranslationDocument
from borr.lib.errors import MalformedVersion
from borr.lib.log import LOG
from borr.lib.registry import ExpanderRegistry
from borr.models.dataModel import LangVersion, LineKind, ParseWarning, Translation

LANG_ID_FIELD: Final[str] = "lang_id"
LANG_DESC_FIELD: Final[str] = "lang_desc"
LANG_VER_FIELD: Final[str] = "lang_ver"


class DocumentBuilder:
    """Line-by-line state machine producing a TranslationDocument.

    Attributes:
        currentSection: Name of the section being filled, None in root scope
        strict: Whether ignored lines are recorded as warnings
    """

    def __init__(
        self: Self, registry: ExpanderRegistry | None = None, strict: bool = False
    ) -> None:
        self.registry: ExpanderRegistry | None = registry
        self.strict: bool = strict
        self.currentSection: str | None = None
        self.langId: str = ""
        self.langDescription: str = ""
        self.langVersion: LangVersion | None = None
        self.sections: dict[str, dict[str, str]] = {}
        self.warnings: list[ParseWarning] = []

    def _warn(self: Self, lineNumber: int, line: str, reason: str) -> None:
        if self.strict:
            self.warnings.append(
                ParseWarning(lineNumber=lineNumber, line=line, reason=reason)
            )

    def line_parse(self: Self, line: str, lineNumber: int = 1) -> None:
        """Feed one line to the state machine.

        Args:
            line: Raw line, without its newline
            lineNumber: 1-based position, used for warnings

        Raises:
            MalformedVersion: If the line sets an unparseable lang_ver
        """
        kind: LineKind = line_classify(line)
        if kind is LineKind.EMPTY:
            return
        if kind is LineKind.UNRECOGNIZED:
            self._warn(lineNumber, line, "unrecognized line")
            return

        stripped: str = line_commentsStrip(line)

        if kind is LineKind.SECTION:
            section: str | None = line_sectionMatch(stripped)
            LOG(f"Entering section [{section}]")
            self.currentSection = section
            return

        translation: Translation | None = line_translationMatch(stripped)

        if self.currentSection is None:
            self._root_parse(translation, lineNumber, line)
            return

        self._field_store(translation, lineNumber, line)

    def _root_parse(
        self: Self, translation: Translation, lineNumber: int, line: str
    ) -> None:
        """Handle a translation found before the first section header."""
        field, value = translation
        if field == LANG_ID_FIELD:
            LOG(f"Found {LANG_ID_FIELD}: {value}")
            self.langId = value
        elif field == LANG_DESC_FIELD:
            LOG(f"Found {LANG_DESC_FIELD}: {value}")
            self.langDescription = value
        elif field == LANG_VER_FIELD:
            LOG(f"Found {LANG_VER_FIELD}: {value}")
            try:
                self.langVersion = LangVersion.fromString(value)
            except MalformedVersion as e:
                LOG(f"Line {lineNumber}: {e}")
                raise
        else:
            self._warn(lineNumber, line, f"field '{field}' outside of any section")

    def _field_store(
        self: Self, translation: Translation, lineNumber: int, line: str
    ) -> None:
        """Store a translation in the current section."""
        field, value = translation
        key: str = field_keyGet(field)
        section: dict[str, str] = self.sections.setdefault(self.currentSection, {})

        if key in section and field_isMultiline(field):
            section[key] = section[key] + "\n" + value
            return

        if key in section:
            self._warn(lineNumber, line, f"field '{key}' overwrites an earlier value")
        section[key] = value

    def document_build(self: Self) -> TranslationDocument:
        """Hand over the accumulated state as a new document."""
        return TranslationDocument(
            langId=self.langId,
            langDescription=self.langDescription,
            langVersion=self.langVersion,
            sections=self.sections,
            registry=self.registry,
            warnings=self.warnings,
        )


def document_parse(
    text: str, registry: ExpanderRegistry | None = None, strict: bool | None = None
) -> TranslationDocument:
    """Parse the complete text of a language file.

    Args:
        text: Document text
        registry: Expander registry for the document, the process-wide one if
            not given
        strict: Collect warnings for ignored lines, defaults to
            `appsettings.strictParse`

    Returns:
        TranslationDocument: The parsed document

    Raises:
        MalformedVersion: If lang_ver is present but not `uint.uint.uint`
    """
    builder: DocumentBuilder = DocumentBuilder(
        registry=registry,
        strict=appsettings.strictParse if strict is None else strict,
    )
    for lineNumber, line in enumerate(text.split("\n"), start=1):
        builder.line_parse(line, lineNumber)
    return builder.document_build()


def document_fromFile(
    path: str | Path,
    registry: ExpanderRegistry | None = None,
    strict: bool | None = None,
) -> TranslationDocument:
    """Read a language file from disk and parse it.

    Args:
        path: Path of the file
        registry: See document_parse
        strict: See document_parse

    Returns:
        TranslationDocument: The parsed document

    Raises:
        FileNotFoundError: If path does not exist
        IsADirectoryError: If path is not a regular file
        MalformedVersion: See document_parse
    """
    filePath: Path = Path(path)
    if not filePath.exists():
        raise FileNotFoundError(f"Language file not found: {filePath}")
    if not filePath.is_file():
        raise IsADirectoryError(f"Language file is not a regular file: {filePath}")

    LOG(f"Reading language file {filePath}")
    return document_parse(
        filePath.read_text(encoding="utf-8"), registry=registry, strict=strict
    )


def document_serialize(document: TranslationDocument) -> str:
    """Write a document back in the file format, variables unexpanded.

    Multi-line values are written as one `field[]` line per line of the
    value. Parsing the result yields the same metadata and sections.

    Args:
        document: Document to serialize

    Returns:
        str: Document text, newline terminated
    """
    lines: list[str] = []

    if document.langId:
        lines.append(f'{LANG_ID_FIELD} = "{document.langId}"')
    if document.langDescription:
        lines.append(f'{LANG_DESC_FIELD} = "{document.langDescription}"')
    if document.langVersion is not None:
        version: LangVersion = document.langVersion
        lines.append(
            f'{LANG_VER_FIELD} = "{version.major}.{version.minor}.{version.revision}"'
        )

    for name, fields in document.sections.items():
        if lines:
            lines.append("")
        lines.append(f"[{name}]")
        for field, value in fields.items():
            pieces: list[str] = value.split("\n")
            if len(pieces) == 1:
                lines.append(f'{field} = "{value}"')
            else:
                lines.extend(f'{field}[] = "{piece}"' for piece in pieces)

    return "\n".join(lines) + "\n"
