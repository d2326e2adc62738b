# therapy_scheduler/db/mongo.py
from motor.motor_asyncio import AsyncIOMotorClient
from therapy_scheduler.core.config import get_settings
from therapy_scheduler.core.logger import logger

settings = get_settings()

client = AsyncIOMotorClient(settings.MONGODB_URI)
db = client[settings.MONGODB_DB]


# Function to check DB connection
async def verify_mongodb_connection():
    try:
        await client.server_info()
        logger.info("MongoDB connection established")
    except Exception as e:
        logger.error(f"MongoDB connection failed: {str(e)}")
