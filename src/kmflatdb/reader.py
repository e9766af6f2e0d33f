import logging
import re
from kmflatdb.constants import BLANK_TAG, NCBI_TOP_TAG, REFERENCE_PATTERN, REFERENCE_TAG
from kmflatdb.tags import split_lines, tag_of

logger = logging.getLogger(__name__)


def _split_sections(text: str, starts_section) -> list[str]:
    sections: list[str] = []

    for line in split_lines(text):
        if len(sections) == 0 or starts_section(line):
            sections.append(line)
        else:
            sections[-1] += line

    return sections


def split_top_level(text: str) -> list[str]:
    """Splits an NCBI style entry at every line whose first column holds a letter or '/'.

    The first line always opens the first section. Indented lines are
    continuations of the section above them.
    """
    return _split_sections(text, lambda line: NCBI_TOP_TAG.match(line) is not None)


def split_sub_level(text: str, tag_size: int) -> list[str]:
    """Splits one top level section at its sub tags.

    A sub tag is a line indented by 1 to ``tag_size - 1`` blanks followed by
    text, e.g. ``  ORGANISM`` inside ``SOURCE``. Lines whose tag column is
    blank stay with the sub tag above them.
    """
    if tag_size < 2:
        return _split_sections(text, lambda line: False)

    sub_tag = re.compile(r'\s{1,%d}\S' % (tag_size - 1))
    return _split_sections(text, lambda line: sub_tag.match(line) is not None)


def _first_line(section: str) -> str:
    return section.split('\n', 1)[0]


def ncbi_entry_to_map(entry: str, tag_size: int) -> dict[str, str]:
    fields: dict[str, str] = {}

    sections = split_top_level(entry)
    for section in sections:
        tag = tag_of(_first_line(section), tag_size)
        fields[tag] = fields.get(tag, '') + section

    logger.debug("Indexed %d sections under %d tags", len(sections), len(fields))
    return fields


def embl_entry_to_map(entry: str, tag_size: int) -> dict[str, str]:
    fields: dict[str, str] = {}
    skipped = 0

    for line in split_lines(entry):
        tag = tag_of(line, tag_size)

        if tag == BLANK_TAG:
            skipped += 1
            continue

        if REFERENCE_PATTERN.match(tag):
            tag = REFERENCE_TAG

        fields[tag] = fields.get(tag, '') + line

    logger.debug("Indexed %d tags, discarded %d %s lines", len(fields), skipped, BLANK_TAG)
    return fields
