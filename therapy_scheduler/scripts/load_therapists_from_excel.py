# scripts/load_therapists_from_excel.py

import argparse
import asyncio
from uuid import uuid4

import pandas as pd
from motor.motor_asyncio import AsyncIOMotorClient
from therapy_scheduler.core.config import get_settings
from therapy_scheduler.core.logger import logger


def _split_cell(value) -> list:
    if pd.isna(value):
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def build_therapist_records(df: pd.DataFrame) -> list:
    """Rows with columns Name, Specialties, Accepted Insurance -> therapist documents."""
    records = []
    for _, row in df.iterrows():
        if pd.isna(row.get("Name")) or not str(row["Name"]).strip():
            continue
        records.append({
            "id": f"ther-{uuid4().hex[:8]}",
            "name": str(row["Name"]).strip(),
            "specialties": _split_cell(row.get("Specialties")),
            "accepted_insurance": _split_cell(row.get("Accepted Insurance")),
        })
    return records


async def load_therapists(path: str, replace: bool = False):
    df = pd.read_excel(path)
    settings = get_settings()

    client = AsyncIOMotorClient(settings.MONGODB_URI)
    therapists_collection = client[settings.MONGODB_DB]["therapists"]

    if replace:
        await therapists_collection.delete_many({})

    records = build_therapist_records(df)
    if records:
        await therapists_collection.insert_many(records)
        logger.info(f"Inserted {len(records)} therapists into MongoDB.")
    else:
        logger.warning(f"No therapist rows found in {path}")
    client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load therapists from a spreadsheet")
    parser.add_argument("path", help="Excel file with Name, Specialties, Accepted Insurance columns")
    parser.add_argument("--replace", action="store_true", help="Delete existing therapists first")
    args = parser.parse_args()
    asyncio.run(load_therapists(args.path, replace=args.replace))
