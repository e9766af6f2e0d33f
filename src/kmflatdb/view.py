from kmflatdb.record import FlatRecord


def format_record_as_field_view(record: FlatRecord):
    try:
        entry_id = record.entry_id()
    except NotImplementedError:
        entry_id = "UNK"

    res = f"ENTRY: {entry_id}   Tags: {len(record.tags())}\n"
    for tag in record.tags():
        res += f"\n{tag}: {record.fetch(tag)}"
    return res
