"""
Script parser - turns script text into resource tables and entries.

The script format is line based and split into sections:

```
## FONTS
silver#fonts/Silver.ttf
## CURSOR SPRITES
arrow#images/cursor.png
## BACKGROUNDS
forest#images/forest.png@0x0
## ACTORS
wren#portraits/wren.png|voices/wren.wav
## ENTRIES
s#font:silver|box_text_speed:60
i#forest
t#wren@Good morning.
c#Stay@4|Leave@6
```

Every non-blank, non-header line is `name#descriptor`. Entry payloads
are stored verbatim; the interpreter gives them meaning later.
Lines before the first header are read as fonts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from lyrebird.core.errors import FormatError
from lyrebird.resources.assets import AssetHandle, AssetLoader
from lyrebird.script.entries import DECIMAL


class Section(Enum):
    """Script sections, valued by their header line."""
    FONTS = "## FONTS"
    CURSOR_SPRITES = "## CURSOR SPRITES"
    BACKGROUNDS = "## BACKGROUNDS"
    ACTORS = "## ACTORS"
    ENTRIES = "## ENTRIES"


HEADERS = {section.value: section for section in Section}


class Entry(NamedTuple):
    """One (type, payload) step of the script."""
    type: str
    payload: str


@dataclass(frozen=True)
class BackgroundEntry:
    """A background image and where it sits."""
    position: tuple[float, float]
    image: AssetHandle


@dataclass(frozen=True)
class ActorEntry:
    """An actor's portrait and voice cue."""
    portrait: AssetHandle
    voice: AssetHandle


@dataclass
class ParsedScript:
    """Everything one successful parse produces."""
    fonts: dict[str, AssetHandle] = field(default_factory=dict)
    cursor_sprites: dict[str, AssetHandle] = field(default_factory=dict)
    backgrounds: dict[str, BackgroundEntry] = field(default_factory=dict)
    actors: dict[str, ActorEntry] = field(default_factory=dict)
    entries: list[Entry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


class ScriptParser:
    """
    Parses script text into a ParsedScript.

    Parsing builds into a fresh ParsedScript and only returns it when
    every line was valid, so callers can swap it in atomically.
    """

    NAME_DELIMITER = "#"
    POSITION_DELIMITER = "@"
    AXIS_DELIMITER = "x"
    PATH_DELIMITER = "|"

    def __init__(self, loader: AssetLoader):
        self.loader = loader

    def parse_file(self, path: str | Path) -> ParsedScript:
        """Parse a UTF-8 script file."""
        with open(Path(path), 'r', encoding='utf-8') as f:
            return self.parse_string(f.read())

    def parse_string(self, content: str) -> ParsedScript:
        """
        Parse script text.

        Raises:
            FormatError: On the first malformed line
        """
        script = ParsedScript()
        section = Section.FONTS

        for line_number, raw_line in enumerate(content.splitlines(), start=1):
            line = raw_line.rstrip()

            if not line.strip():
                continue

            if line in HEADERS:
                section = HEADERS[line]
                continue

            name, descriptor = self._split(line, self.NAME_DELIMITER, section, line_number, raw_line)

            if section is Section.FONTS:
                script.fonts[name] = self.loader.load(descriptor)

            elif section is Section.CURSOR_SPRITES:
                script.cursor_sprites[name] = self.loader.load(descriptor)

            elif section is Section.BACKGROUNDS:
                path, position = self._split(
                    descriptor, self.POSITION_DELIMITER, section, line_number, raw_line
                )
                x, y = self._split(position, self.AXIS_DELIMITER, section, line_number, raw_line)
                script.backgrounds[name] = BackgroundEntry(
                    position=(
                        self._float(x, section, line_number, raw_line),
                        self._float(y, section, line_number, raw_line),
                    ),
                    image=self.loader.load(path),
                )

            elif section is Section.ACTORS:
                portrait, voice = self._split(
                    descriptor, self.PATH_DELIMITER, section, line_number, raw_line
                )
                script.actors[name] = ActorEntry(
                    portrait=self.loader.load(portrait),
                    voice=self.loader.load(voice),
                )

            else:
                script.entries.append(Entry(name, descriptor))

        return script

    @staticmethod
    def _split(
        text: str,
        delimiter: str,
        section: Section,
        line_number: int,
        raw_line: str,
    ) -> tuple[str, str]:
        """Split into exactly two fields or fail."""
        parts = text.split(delimiter)
        if len(parts) != 2:
            raise FormatError(
                section.name, line_number, raw_line,
                f"expected one {delimiter!r} delimiter",
            )
        return parts[0], parts[1]

    @staticmethod
    def _float(text: str, section: Section, line_number: int, raw_line: str) -> float:
        if not DECIMAL.fullmatch(text):
            raise FormatError(
                section.name, line_number, raw_line, f"{text!r} is not a number"
            )
        return float(text)
