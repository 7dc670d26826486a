import logging

from fastapi import FastAPI

from landiq.settings import get_settings


def health():
    return {"status": "ok"}


app = FastAPI(title="LandIQ")
app.add_api_route("/health", health, methods=["GET"])


if app:
    from landiq.api.routes.map import router as map_router
    from landiq.api.routes.properties import router as properties_router

    app.include_router(properties_router, prefix="/api")
    app.include_router(map_router, prefix="/api")


@app.on_event("startup")
def _log_startup_settings():
    settings = get_settings()
    logging.getLogger("landiq.api").info(
        "startup settings: db=%s radius_m=%s clearance_m=%s rings=%s angles=%s spacing=%s",
        settings.db_path,
        settings.circle_radius_m,
        settings.min_clearance_m,
        settings.max_rings,
        settings.ring_angles,
        settings.ring_spacing,
    )
