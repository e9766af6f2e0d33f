import logging
from dataclasses import dataclass
import yaml
from kmflatdb.constants import *

logger = logging.getLogger(__name__)


class FamilyConfigError(ValueError):
    pass


@dataclass(frozen=True)
class RecordFamily:
    """Describes one database flat file format.

        |<- tag field ->||<- data field                       ---->|
        LOCUS       AB000001    1234 bp    DNA     linear   PRI
        DEFINITION  Hoge gene of the Pokemonia pikachuae

    ``delimiter`` separates entries in a multi entry file and ``tag_size``
    is the width of the tag field.
    """
    name: str
    style: str
    delimiter: str
    tag_size: int

    def __post_init__(self):
        if self.style not in STYLES:
            raise FamilyConfigError(f"Unknown style {self.style!r} for family {self.name!r}")
        if isinstance(self.tag_size, bool) or not isinstance(self.tag_size, int) or self.tag_size < 1:
            raise FamilyConfigError(f"tag_size of family {self.name!r} must be a positive integer")
        if not isinstance(self.delimiter, str) or self.delimiter == '':
            raise FamilyConfigError(f"delimiter of family {self.name!r} must be a non empty string")

    def record_class(self):
        from kmflatdb.record import NCBIRecord, EMBLRecord

        return NCBIRecord if self.style == NCBI else EMBLRecord


GENBANK = RecordFamily('genbank', NCBI, ENTRY_DELIMITER, NCBI_TAGSIZE)
KEGG = RecordFamily('kegg', NCBI, KEGG_DELIMITER, NCBI_TAGSIZE)
EMBL_FAMILY = RecordFamily('embl', EMBL, ENTRY_DELIMITER, EMBL_TAGSIZE)
UNIPROT = RecordFamily('uniprot', EMBL, ENTRY_DELIMITER, EMBL_TAGSIZE)

BUILTIN_FAMILIES = {family.name: family for family in (GENBANK, KEGG, EMBL_FAMILY, UNIPROT)}


def _family_from_obj(name, obj) -> RecordFamily:
    if not isinstance(obj, dict):
        raise FamilyConfigError(f"Family {name!r} must be a mapping")

    missing = [key for key in ('style', 'delimiter', 'tag_size') if key not in obj]
    if len(missing) > 0:
        raise FamilyConfigError(f"Family {name!r} is missing {', '.join(missing)}")

    return RecordFamily(str(name), obj['style'], obj['delimiter'], obj['tag_size'])


def load_families(source) -> dict[str, RecordFamily]:
    """Reads family descriptors from a YAML file path or an open stream.

    The document looks like::

        families:
          refseq:
            style: ncbi
            delimiter: "\\n//\\n"
            tag_size: 12

    Entries are merged over the built in families, so a name like
    ``genbank`` overrides the default descriptor.
    """
    if isinstance(source, str):
        with open(source, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        data = yaml.safe_load(source)

    if data is None:
        data = {}

    if not isinstance(data, dict) or not isinstance(data.get('families', {}), dict):
        raise FamilyConfigError("Expected a 'families' mapping at the top of the document")

    families = dict(BUILTIN_FAMILIES)
    for name, obj in (data.get('families') or {}).items():
        families[str(name)] = _family_from_obj(name, obj)
        logger.debug("Loaded record family %s", name)

    return families
