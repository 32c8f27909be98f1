"""
Entry point to run the API server.
"""
import uvicorn

from app.api import app
from core.config import get_settings


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
