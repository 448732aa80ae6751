from dotenv import load_dotenv

load_dotenv()
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router as api_router
from app.core.config import settings
from app.services.grammar.sentences import get_sentence_splitter

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Satz-Splitter einmal vorwärmen, damit der erste Request nicht die Pipeline baut
    get_sentence_splitter().split("Warmup.")
    logger.info("%s gestartet (env=%s, splitter=%s)", settings.app_name, settings.environment, settings.sentence_splitter)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} running"}
