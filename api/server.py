"""FastAPI server exposing the ring controller for local tooling."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from action_controller.controller import RingController
from context_module.category_classifier import classify
from profile_module.action_schema import action_from_dict, profile_to_dict

controller = RingController()

app = FastAPI(title="Ring Control API", version="0.1.0")

_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FocusRequest(BaseModel):
    bundle_id: Optional[str] = None


class ExecuteActionRequest(BaseModel):
    action: dict[str, Any]


class ValidateScriptRequest(BaseModel):
    script: str


@app.get("/status")
def status():
    return controller.status()


@app.get("/profile/current")
def current_profile():
    profile = controller.current_profile()
    if profile is None:
        return {"profile": None}
    return {"profile": profile_to_dict(profile)}


@app.post("/focus")
def focus(req: FocusRequest):
    # Non-empty ids are debounced; the response only carries a profile for the no-app path.
    profile = controller.handle_focus_change(req.bundle_id)
    return {
        "status": "ok",
        "debounced": bool(req.bundle_id),
        "profile": profile_to_dict(profile) if profile else None,
    }


@app.post("/slots/{position}/execute")
def execute_slot(position: int):
    return controller.select_slot(position).to_dict()


@app.post("/actions/execute")
def execute_action(req: ExecuteActionRequest):
    try:
        action = action_from_dict(req.action)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return controller.execute_action(action).to_dict()


@app.post("/scripts/validate")
def validate_script(req: ValidateScriptRequest):
    validation = controller.dispatcher.sandbox.validate(req.script)
    return {"is_valid": validation.is_valid, "reason": validation.reason}


@app.get("/classify/{bundle_id}")
def classify_bundle(bundle_id: str):
    return {"bundle_id": bundle_id, "category": classify(bundle_id).value}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.server:app", host="127.0.0.1", port=8000, reload=True)
