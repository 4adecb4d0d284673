import os

from dotenv import load_dotenv

load_dotenv()

# --- DATABASE SETTINGS ---
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/arbolitos")
MONGO_DB_NAME = "arbolitos"
PLANTS_COLLECTION = "plants"

# Applied once when the client selects a server at startup
SERVER_SELECTION_TIMEOUT_MS = 10_000

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
