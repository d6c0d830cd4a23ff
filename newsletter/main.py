from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from newsletter.api.routes import subscriptions
from newsletter.utils.logging import logger


def create_app() -> FastAPI:
    """
    Build the newsletter API: the subscription form endpoint plus a health check.

    The email client is not wired into any route yet; see `newsletter.config`
    for building one from the environment.
    """
    app = FastAPI(
        title="Newsletter API",
        version="1.0.0",
        description="Newsletter subscriptions and transactional email delivery.",
    )

    # The subscription form is posted from a static site on another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    app.include_router(subscriptions.router)

    @app.get("/health", tags=["system"])
    def health_check():
        return {"status": "ok"}

    logger.info(f"Newsletter API ready with {len(app.routes)} routes")
    return app


app = create_app()
