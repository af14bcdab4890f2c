from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from pocketnotes import config
from pocketnotes.api import notes, session
from pocketnotes.core.exceptions import register_exception_handlers
from pocketnotes.core.logging import setup_logging
from pocketnotes.workspace import Workspace


def create_app(data_dir: Optional[Path] = None) -> FastAPI:
    setup_logging(config.log_level())

    app = FastAPI(title="Pocket Notes")
    workspace = Workspace.from_env(data_dir)
    # pick up a session left over from the previous run
    workspace.restore()
    app.state.workspace = workspace

    register_exception_handlers(app)
    app.include_router(session.router)
    app.include_router(notes.router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
