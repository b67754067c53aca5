from fastapi import FastAPI

from .api.app import router

app = FastAPI(title="droidctl")
app.include_router(router)
