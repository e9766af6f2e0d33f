import json
import re
import yaml
import io
import xml.etree.ElementTree as ET
from kmflatdb.constants import ENTRY_DELIMITER
from kmflatdb.record import FlatRecord

# characters XML 1.0 cannot carry, even escaped
_XML_INVALID = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _record_tags(record: FlatRecord, ignored_tags: list[str], sort_tags: bool) -> list[str]:
    tags = [tag for tag in record.tags() if ignored_tags.count(tag) == 0]
    return sorted(tags) if sort_tags else tags


class FieldJsonWriter:
    def __init__(self, f, layout_format: int = 1, ignored_tags: list[str] | None = None, indent: int | None = None, sort_tags = False):
        self.f = f
        self.format = layout_format
        self.ignored_tags = [] if ignored_tags is None else ignored_tags
        self.indent = indent
        self.sort_tags = sort_tags

    def _write_format1(self, record: FlatRecord):
        obj = {
            'fields': []
        }

        for tag in _record_tags(record, self.ignored_tags, self.sort_tags):
            obj['fields'].append({
                tag: record.fields.lines_fetch(tag)
            })

        return obj

    def _write_format2(self, record: FlatRecord):
        obj = {
            'fields': {}
        }

        for tag in _record_tags(record, self.ignored_tags, self.sort_tags):
            obj['fields'][tag] = record.fetch(tag)

        return obj

    def _to_obj(self, record: FlatRecord):
        if self.format == 1:
            return self._write_format1(record)
        return self._write_format2(record)

    def write(self, record: FlatRecord):
        json.dump(self._to_obj(record), self.f, indent=self.indent)

    def write_all(self, records: list[FlatRecord]):
        json.dump([self._to_obj(record) for record in records], self.f, indent=self.indent)


class FieldYamlWriter(FieldJsonWriter):
    def write(self, record: FlatRecord):
        yaml.dump(self._to_obj(record), self.f, indent=self.indent, sort_keys=False)

    def write_all(self, records: list[FlatRecord]):
        yaml.dump([self._to_obj(record) for record in records], self.f, indent=self.indent, sort_keys=False)


class FieldXmlWriter:
    def __init__(self, f, indent: int | None = None, ignored_tags: list[str] | None = None, xml_declaration=True, sort_tags = False) -> None:
        self.f = f
        self.xml_declaration = xml_declaration
        self.indent = indent
        self.ignored_tags = [] if ignored_tags is None else ignored_tags
        self.collection_tag = ET.Element('collection')
        self.sort_tags = sort_tags

    def write(self, record: FlatRecord):
        record_tag = ET.SubElement(self.collection_tag, 'record')

        for tag in _record_tags(record, self.ignored_tags, self.sort_tags):
            field_tag = ET.SubElement(record_tag, 'field')
            field_tag.attrib['tag'] = tag
            field_tag.text = _XML_INVALID.sub("", record.get(tag))

    def write_all(self, *records):
        for record in records:
            self.write(record)

    def flush(self):
        if self.indent is not None:
            ET.indent(self.collection_tag, space=''.join([" "] * self.indent))

        self.f.write(ET.tostring(self.collection_tag, xml_declaration=self.xml_declaration, encoding="unicode"))


class FlatFileWriter:
    """Writes entries back in their flat file form, each one followed by ``delimiter``."""

    def __init__(self, f: io.TextIOBase, delimiter: str = ENTRY_DELIMITER, ignored_tags: list[str] | None = None) -> None:
        self.f = f
        self.delimiter = delimiter
        self.ignored_tags = [] if ignored_tags is None else ignored_tags

    def write(self, record: FlatRecord):
        text = ''.join(record.get(tag) for tag in _record_tags(record, self.ignored_tags, False))
        self.f.write(text.rstrip('\n'))
        self.f.write(self.delimiter)

    def write_all(self, *records):
        for record in records:
            self.write(record)


def write_fields_json_to_path(path: str, records: list[FlatRecord] | FlatRecord, encoding = "utf-8", writer_getter = None):
    with open(path, "w", encoding=encoding) as f:
        writer = writer_getter(f) if writer_getter is not None else FieldJsonWriter(f)
        if isinstance(records, FlatRecord):
            writer.write(records)
        else:
            writer.write_all(records)


def write_fields_yaml_to_path(path: str, records: list[FlatRecord] | FlatRecord, encoding = "utf-8", writer_getter = None):
    with open(path, "w", encoding=encoding) as f:
        writer = writer_getter(f) if writer_getter is not None else FieldYamlWriter(f)
        if isinstance(records, FlatRecord):
            writer.write(records)
        else:
            writer.write_all(records)


def write_fields_xml_to_path(path: str, records: list[FlatRecord] | FlatRecord, encoding = "utf-8", writer_getter = None):
    with open(path, "w", encoding=encoding) as f:
        writer = writer_getter(f) if writer_getter is not None else FieldXmlWriter(f)
        if isinstance(records, FlatRecord):
            writer.write(records)
        else:
            writer.write_all(*records)

        writer.flush()


def write_fields_flat_to_path(path: str, records: list[FlatRecord] | FlatRecord, encoding = "utf-8", writer_getter = None):
    with open(path, "w", encoding=encoding) as f:
        writer = writer_getter(f) if writer_getter is not None else FlatFileWriter(f)
        if isinstance(records, FlatRecord):
            writer.write(records)
        else:
            writer.write_all(*records)
