# tests/test_load_therapists.py

import pandas as pd

from therapy_scheduler.scripts.load_therapists_from_excel import build_therapist_records


def test_build_therapist_records_splits_list_columns():
    df = pd.DataFrame([
        {"Name": "Dr. Amanda Wilson", "Specialties": "Anxiety, Depression, PTSD", "Accepted Insurance": "Aetna, Blue Cross"},
        {"Name": "  ", "Specialties": "Grief", "Accepted Insurance": "Kaiser"},
        {"Name": "Dr. Maria Gonzalez", "Specialties": "Addiction", "Accepted Insurance": None},
    ])

    records = build_therapist_records(df)

    assert len(records) == 2
    assert records[0]["name"] == "Dr. Amanda Wilson"
    assert records[0]["specialties"] == ["Anxiety", "Depression", "PTSD"]
    assert records[0]["accepted_insurance"] == ["Aetna", "Blue Cross"]
    assert records[0]["id"].startswith("ther-")
    assert records[1]["accepted_insurance"] == []
