"""Run the server: python -m feedwatch"""

import uvicorn

from .config import config

if __name__ == "__main__":
    uvicorn.run("feedwatch.server:app", host="127.0.0.1", port=config.PORT)
