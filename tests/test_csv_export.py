import csv
from io import StringIO

from inkstudio.shared.csv_export import csv_response, to_csv


def test_to_csv_quotes_and_escapes():
    content = to_csv(["name", "notes"], [["Ann; Lee", 'said "hi"'], ["Bo", "two\nlines"]])

    assert content == 'name;notes\r\n"Ann; Lee";"said ""hi"""\r\nBo;"two\nlines"'


def test_to_csv_renders_none_and_booleans():
    content = to_csv(["a", "b", "c"], [[None, True, False]])

    assert content == "a;b;c\r\n;1;0"


def test_to_csv_header_only():
    assert to_csv(["a", "b"], []) == "a;b"


def test_to_csv_parses_back():
    rows = [["1", "Ann; Lee", 'x "y"']]
    content = to_csv(["id", "name", "note"], rows)

    parsed = list(csv.reader(StringIO(content), delimiter=";"))
    assert parsed[1] == rows[0]


def test_csv_response_headers():
    response = csv_response("a;b", "clients-2024-03-01_2024-03-31.csv", with_bom=True)

    assert response.media_type == "text/csv; charset=utf-8"
    assert response.headers["content-disposition"] == 'attachment; filename="clients-2024-03-01_2024-03-31.csv"'
