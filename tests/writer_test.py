import io
import json
import os
import tempfile
import unittest
import xml.etree.ElementTree as ET

import yaml

from kmflatdb.record import EMBLRecord, NCBIRecord
from kmflatdb.writer import (
    FieldJsonWriter,
    FieldXmlWriter,
    FieldYamlWriter,
    FlatFileWriter,
    write_fields_flat_to_path,
    write_fields_json_to_path,
    write_fields_xml_to_path,
    write_fields_yaml_to_path,
)

EMBL_TEXT = "ID   HOGE_PIKA\nXX\nDE   Hoge protein\nDE   (Pikachu factor).\nRN   [1]\nRA   Ash K.;\n"
NCBI_TEXT = "LOCUS       AB000001\nDEFINITION  Hoge gene\n            clone hoge-1.\nACCESSION   AB000001\n"


class TestFieldWriters(unittest.TestCase):
    def setUp(self):
        self.record = EMBLRecord(EMBL_TEXT, 5)

    def test_json_format1(self):
        f = io.StringIO()
        FieldJsonWriter(f).write(self.record)

        self.assertEqual(json.loads(f.getvalue()), {
            'fields': [
                {'ID': ['HOGE_PIKA']},
                {'DE': ['Hoge protein', '(Pikachu factor).']},
                {'R': ['[1]', 'Ash K.;']},
            ]
        })

    def test_json_format2_sorted_and_ignored(self):
        f = io.StringIO()
        FieldJsonWriter(f, layout_format=2, ignored_tags=['ID'], sort_tags=True).write_all([self.record])

        obj = json.loads(f.getvalue())
        self.assertEqual(obj, [{'fields': {'DE': 'Hoge protein (Pikachu factor).', 'R': '[1] Ash K.;'}}])
        self.assertEqual(list(obj[0]['fields']), ['DE', 'R'])

    def test_yaml(self):
        f = io.StringIO()
        FieldYamlWriter(f, layout_format=2).write(self.record)

        self.assertEqual(yaml.safe_load(f.getvalue()), {
            'fields': {'ID': 'HOGE_PIKA', 'DE': 'Hoge protein (Pikachu factor).', 'R': '[1] Ash K.;'}
        })

    def test_xml(self):
        f = io.StringIO()
        writer = FieldXmlWriter(f, indent=2, xml_declaration=False)
        writer.write_all(self.record, NCBIRecord(NCBI_TEXT, 12))
        writer.flush()

        root = ET.fromstring(f.getvalue())
        records = root.findall('record')
        self.assertEqual(len(records), 2)
        self.assertEqual([field.attrib['tag'] for field in records[1].findall('field')], ['LOCUS', 'DEFINITION', 'ACCESSION'])
        self.assertEqual(records[0].find('field').text, 'ID   HOGE_PIKA\n')

    def test_xml_drops_control_characters(self):
        f = io.StringIO()
        writer = FieldXmlWriter(f)
        writer.write(NCBIRecord("LOCUS       AB\x01000001\nCOMMENT     page\x0cbreak\ttab", 12))
        writer.flush()

        fields = ET.fromstring(f.getvalue()).findall('record/field')
        self.assertEqual(fields[0].text, "LOCUS       AB000001\n")
        self.assertEqual(fields[1].text, "COMMENT     pagebreak\ttab")


class TestFlatFileWriter(unittest.TestCase):
    def test_round_trip(self):
        record = NCBIRecord(NCBI_TEXT, 12)
        f = io.StringIO()
        FlatFileWriter(f).write_all(record, record)

        self.assertEqual(f.getvalue(), (NCBI_TEXT.strip() + "\n//\n") * 2)

    def test_spacer_lines_are_not_written(self):
        f = io.StringIO()
        FlatFileWriter(f, delimiter="\n///\n").write(EMBLRecord(EMBL_TEXT, 5))

        self.assertEqual(f.getvalue(), EMBL_TEXT.replace("XX\n", "").strip() + "\n///\n")


class TestWriteToPath(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp()
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def test_json_single_record(self):
        write_fields_json_to_path(self.path, EMBLRecord(EMBL_TEXT, 5))

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f)['fields'][0], {'ID': ['HOGE_PIKA']})

    def test_flat_records(self):
        record = NCBIRecord(NCBI_TEXT, 12)
        write_fields_flat_to_path(self.path, [record])

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(f.read(), NCBI_TEXT.strip() + "\n//\n")

    def test_yaml_single_record(self):
        write_fields_yaml_to_path(self.path, EMBLRecord(EMBL_TEXT, 5))

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(yaml.safe_load(f)['fields'][1], {'DE': ['Hoge protein', '(Pikachu factor).']})

    def test_yaml_records(self):
        write_fields_yaml_to_path(self.path, [EMBLRecord(EMBL_TEXT, 5), NCBIRecord(NCBI_TEXT, 12)])

        with open(self.path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f)
        self.assertEqual(len(obj), 2)
        self.assertEqual(obj[1]['fields'][0], {'LOCUS': ['AB000001']})

    def test_xml_single_record(self):
        write_fields_xml_to_path(self.path, NCBIRecord(NCBI_TEXT, 12))

        root = ET.parse(self.path).getroot()
        self.assertEqual(len(root.findall('record')), 1)
        self.assertEqual(root.find('record/field').attrib['tag'], 'LOCUS')

    def test_xml_records(self):
        write_fields_xml_to_path(self.path, [EMBLRecord(EMBL_TEXT, 5), NCBIRecord(NCBI_TEXT, 12)])

        records = ET.parse(self.path).getroot().findall('record')
        self.assertEqual(len(records), 2)
        self.assertEqual([field.attrib['tag'] for field in records[0].findall('field')], ['ID', 'DE', 'R'])


if __name__ == '__main__':
    unittest.main()
