from types import MappingProxyType
from kmflatdb.constants import EMBL, NCBI
from kmflatdb.family import FamilyConfigError, RecordFamily
from kmflatdb.reader import embl_entry_to_map, ncbi_entry_to_map, split_sub_level
from kmflatdb.tags import clean, strip_tag, tag_of

FIELD = 'field'
LINES = 'lines'


class FieldAccessor:
    """Read access to the tagged fields of one entry.

    ``raw`` holds the original text of every tag and never changes. Parsed
    values are computed on demand and kept in a separate cache, one slot
    per (kind, tag), filled at most once.
    """

    def __init__(self, fields: dict[str, str], tag_size: int) -> None:
        self.tag_size = tag_size
        self.__orig = dict(fields)
        self.__data: dict[tuple[str, str], object] = {}

    @property
    def raw(self):
        return MappingProxyType(self.__orig)

    def tags(self):
        return self.__orig.keys()

    def exists(self, tag: str) -> bool:
        return tag in self.__orig

    def get(self, tag: str) -> str:
        return self.__orig.get(tag, '')

    def fetch(self, tag: str, skip: int = 0) -> str:
        """Returns the content of the field without its tag column, white space collapsed.

        The first ``skip`` lines of the field are left out.
        """
        field = self.get(tag).split('\n', skip)[-1]
        return clean('\n'.join(strip_tag(line, self.tag_size) for line in field.split('\n')))

    def field_fetch(self, tag: str, skip: int = 0) -> str:
        # keyed by tag only, a later call with another skip gets the first result
        key = (FIELD, tag)
        if key not in self.__data:
            self.__data.setdefault(key, self.fetch(tag, skip))
        return self.__data[key]

    def lines_fetch(self, tag: str) -> list[str]:
        key = (LINES, tag)
        if key not in self.__data:
            lines = self.get(tag).split('\n')
            while len(lines) > 0 and lines[-1] == '':
                lines.pop()
            self.__data.setdefault(key, tuple(strip_tag(line, self.tag_size) for line in lines))
        return list(self.__data[key])

    def is_cached(self, tag: str, kind: str = FIELD) -> bool:
        return (kind, tag) in self.__data


class FlatRecord:
    """One database entry. Sub classes decide how the entry is indexed and
    must supply ``entry_id``.
    """
    style: str | None = None

    def __init__(self, fields: FieldAccessor) -> None:
        self.fields = fields

    @property
    def tag_size(self) -> int:
        return self.fields.tag_size

    def entry_id(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} does not define entry_id")

    def tags(self):
        return self.fields.tags()

    def exists(self, tag: str) -> bool:
        return self.fields.exists(tag)

    def get(self, tag: str) -> str:
        return self.fields.get(tag)

    def fetch(self, tag: str, skip: int = 0) -> str:
        return self.fields.fetch(tag, skip)

    def __contains__(self, tag) -> bool:
        return self.fields.exists(tag)

    def _field_fetch(self, tag: str, skip: int = 0) -> str:
        return self.fields.field_fetch(tag, skip)

    def _lines_fetch(self, tag: str) -> list[str]:
        return self.fields.lines_fetch(tag)

    def _tag_of(self, line: str) -> str:
        return tag_of(line, self.tag_size)

    def _strip_tag(self, line: str) -> str:
        return strip_tag(line, self.tag_size)

    @staticmethod
    def _index(entry: str, tag_size: int) -> dict[str, str]:
        raise NotImplementedError

    @classmethod
    def from_family(cls, entry: str, family: RecordFamily):
        """Builds a record with the family's tag size, whatever ``cls.__init__`` takes."""
        if family.style != cls.style:
            raise FamilyConfigError(f"{cls.__name__} cannot read {family.style} family {family.name!r}")

        record = cls.__new__(cls)
        FlatRecord.__init__(record, FieldAccessor(cls._index(entry.strip(), family.tag_size), family.tag_size))
        return record


class NCBIRecord(FlatRecord):
    """GenBank, KEGG and other entries whose continuation lines are indented."""
    style = NCBI
    _index = staticmethod(ncbi_entry_to_map)

    def __init__(self, entry: str, tag_size: int) -> None:
        super().__init__(FieldAccessor(self._index(entry.strip(), tag_size), tag_size))

    def _split_sub_level(self, tag: str) -> list[str]:
        return split_sub_level(self.get(tag), self.tag_size)


class KEGGRecord(NCBIRecord):
    pass


class EMBLRecord(FlatRecord):
    """EMBL, TrEMBL, Swiss-Prot entries: one tag on every line."""
    style = EMBL
    _index = staticmethod(embl_entry_to_map)

    def __init__(self, entry: str, tag_size: int) -> None:
        super().__init__(FieldAccessor(self._index(entry.strip(), tag_size), tag_size))
