import uvicorn

from design_api.config import settings

if __name__ == "__main__":
    uvicorn.run("design_api.main:app", host=settings.host, port=settings.port, log_config=None)
