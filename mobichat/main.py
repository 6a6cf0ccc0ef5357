import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mobichat.api.v1.bot_responses import router as bot_responses_router
from mobichat.api.v1.conversations import router as conversations_router
from mobichat.api.v1.facebook_settings import router as facebook_settings_router
from mobichat.api.v1.intents import router as intents_router
from mobichat.api.v1.stats import router as stats_router
from mobichat.api.webhooks import router as webhooks_router
from mobichat.core.config import settings
from mobichat.wiring.dependencies import close_messenger_client


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("conversation_id", "message_id", "intent", "confidence", "language", "category", "recipient_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_messenger_client()


app = FastAPI(title="Mobilis Customer Service Chat", version="1.0.0", lifespan=lifespan)

app.include_router(conversations_router, prefix="/api", tags=["conversations"])
app.include_router(bot_responses_router, prefix="/api", tags=["bot-responses"])
app.include_router(facebook_settings_router, prefix="/api", tags=["facebook"])
app.include_router(stats_router, prefix="/api", tags=["stats"])
app.include_router(intents_router, prefix="/api", tags=["intents"])
app.include_router(webhooks_router, tags=["webhooks"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
