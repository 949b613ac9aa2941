# tests/strategies/records.py
"""Strategies for field names, values and records."""

from hypothesis import strategies as st

from recordfsm.contracts import List, Record, Single, Value

# Template value names (TextFSM style, letters/digits/underscore)
field_names = st.text(
    min_size=1,
    max_size=20,
    alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_0123456789",
)

# Extracted text: single lines of printable unicode, as a line regex captures
field_texts = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")),
    max_size=30,
)

singles = st.builds(Single, field_texts)

lists = st.lists(field_texts, max_size=5).map(List)

values: st.SearchStrategy[Value] = st.one_of(singles, lists)


@st.composite
def records(draw: st.DrawFn, max_fields: int = 6) -> Record:
    """A record built through append_value on distinct field names."""
    fields = draw(st.dictionaries(field_names, values, max_size=max_fields))
    record = Record()
    for name, value in fields.items():
        record.append_value(name, value)
    record.record_key = draw(st.none() | field_texts)
    return record


record_sets = st.lists(records(), max_size=5)
