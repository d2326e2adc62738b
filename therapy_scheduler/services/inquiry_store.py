# therapy_scheduler/services/inquiry_store.py

from datetime import datetime
from typing import List, Optional
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from therapy_scheduler.core.logger import logger
from therapy_scheduler.models.inquiry import InquiryCreate, InquiryInDB
from therapy_scheduler.models.therapist import Therapist


def _id_filter(therapist_id: str) -> dict:
    # Seeded therapists carry a string `id`; others are addressed by ObjectId
    try:
        return {"$or": [{"id": therapist_id}, {"_id": ObjectId(therapist_id)}]}
    except (InvalidId, TypeError):
        return {"id": therapist_id}


class InquiryRepository:
    """Therapist reads and inquiry inserts against MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.therapists = db["therapists"]
        self.inquiries = db["inquiries"]

    async def list_therapists(self, limit: int = 100) -> List[Therapist]:
        docs = await self.therapists.find().to_list(length=limit)
        therapists = []
        for doc in docs:
            try:
                therapists.append(Therapist.from_mongo(doc))
            except ValidationError as e:
                logger.warning(f"Skipping invalid therapist document {doc.get('_id')}: {e.errors()}")
        return therapists

    async def get_therapist(self, therapist_id: str) -> Optional[Therapist]:
        doc = await self.therapists.find_one(_id_filter(therapist_id))
        return Therapist.from_mongo(doc) if doc else None

    async def set_google_refresh_token(self, therapist_id: str, refresh_token: str) -> None:
        result = await self.therapists.update_one(
            _id_filter(therapist_id),
            {"$set": {"google_refresh_token": refresh_token}},
        )
        if result.matched_count == 0:
            raise LookupError(f"Therapist '{therapist_id}' not found")
        logger.info(f"Stored Google refresh token for therapist {therapist_id}")

    async def insert_inquiry(self, inquiry: InquiryCreate) -> InquiryInDB:
        doc = inquiry.model_dump(mode="json")
        doc["created_at"] = datetime.utcnow()
        result = await self.inquiries.insert_one(doc)
        doc["_id"] = str(result.inserted_id)
        logger.info(f"Inserted inquiry {doc['_id']} with status '{doc['status']}'")
        return InquiryInDB(**doc)
