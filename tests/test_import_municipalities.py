# tests/test_import_municipalities.py

from scripts import import_municipalities
from app.modules.tenders.models import Municipality

def write_csv(path, content):
    path.write_text(content, encoding="utf-8")
    return str(path)

def test_parse_semicolon_csv_with_portuguese_headers(tmp_path):
    csv_path = write_csv(tmp_path / "municipios.csv", (
        "Distrito;Concelho\n"
        "Lisboa;Sintra\n"
        "Lisboa;Sintra\n"
        "Lisboa;\n"
        "Porto;Maia\n"
    ))
    assert import_municipalities.parse_municipalities_csv(csv_path) == [
        {"district": "Lisboa", "municipality": "Sintra"},
        {"district": "Porto", "municipality": "Maia"},
    ]

def test_parse_comma_csv_with_english_headers(tmp_path):
    csv_path = write_csv(tmp_path / "municipalities.csv", "district,municipality\nFaro,Loulé\n,Funchal\n")
    assert import_municipalities.parse_municipalities_csv(csv_path) == [
        {"district": "Faro", "municipality": "Loulé"},
        {"district": None, "municipality": "Funchal"},
    ]

def test_import_skips_existing_rows(db_session):
    db_session.add(Municipality(district="Lisboa", municipality="Sintra"))
    db_session.commit()

    inserted = import_municipalities.import_municipalities_to_db([
        {"district": "Lisboa", "municipality": "Sintra"},
        {"district": "Lisboa", "municipality": "Cascais"},
    ], db=db_session)

    assert inserted == 1
    assert sorted(m.municipality for m in db_session.query(Municipality).all()) == ["Cascais", "Sintra"]
