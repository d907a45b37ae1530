from fastapi import (
    FastAPI,
    Request,
    Query,
    HTTPException,
    Response,
)
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from datetime import datetime
from typing import Optional
import logging
import json

from middag.domain.Plan import SharedPlanState
from middag.domain.SelectionPolicy import SelectionPolicy
from middag.infra.Menu_Repository import load_menu
from middag.infra.pdf_utils import generate_pdf_for_plan
from middag.logic.planning.generator import generate_plan
from middag.logic.planning.edits import (
    toggle_lock,
    edit_dish,
    normalize_dish_input,
    reorder_slots,
    move_slot,
    plan_as_text,
)
from middag.utilities.config import DEFAULT_LANGUAGE, DEFAULT_SELECTION_POLICY, STATIC_DIR, TEMPLATES_DIR
from middag.utilities.constants import DAYS_IN_PLAN, SUPPORTED_LANGUAGES
from middag.utilities.translations import normalize_language, translate, ui_strings
from middag.utilities.validators import (
    GenerateRequest,
    LockToggleRequest,
    EditDishRequest,
    ReorderRequest,
    MoveSlotRequest,
    PlanExportRequest,
)

# Routers
from middag.api.routes import shared
from middag.api.routes.shared import autosave, load_shared_plan

# Logging
logger = logging.getLogger("middag_app")

# Initialize FastAPI app
app = FastAPI(title="Middag Weekly Dinner Planner")
app.include_router(shared.router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@app.on_event("shutdown")
def _flush_autosaves():
    """Write queued shared-plan autosaves before the process exits."""
    written = autosave.flush()
    if written:
        logger.info("Flushed %d pending autosave(s) on shutdown", written)


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


# -------------------- Helpers --------------------
def _default_language() -> str:
    return normalize_language(DEFAULT_LANGUAGE, default="no")


def _regenerate(state: SharedPlanState, menu) -> SharedPlanState:
    state.plan = generate_plan(
        state.plan,
        state.locked_ids,
        state.enabled_categories(menu.categories),
        menu,
        policy=state.selection_policy,
        language=state.language,
    )
    return state


def _script_json(data) -> str:
    """JSON safe to embed in a <script> block."""
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def _require_slot(state: SharedPlanState, slot_id: str) -> None:
    if state.plan.get(slot_id) is None:
        raise HTTPException(status_code=404, detail="Slot not found in plan")


# -------------------- UI PAGE --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request, id: Optional[str] = Query(default=None), lang: Optional[str] = Query(default=None)):
    menu = load_menu()
    language = normalize_language(lang, default=_default_language())
    if not menu:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"menu_error": translate(language, "menuLoadError"), "strings": ui_strings(language),
             "language": language, "time": _ts()},
        )

    notice_message = None
    state = None
    share_id = None
    if id:
        try:
            data = load_shared_plan(id)
        except OSError as e:
            logger.error("Failed to load shared plan %s: %s", id, e)
            data = None
        if isinstance(data, dict):
            state = SharedPlanState.from_dict(
                data, default_language=_default_language(),
                default_policy=SelectionPolicy.parse(DEFAULT_SELECTION_POLICY, default=SelectionPolicy.WEIGHTED),
            )
            state.language = normalize_language(state.language, default=_default_language())
            share_id = id
        else:
            notice_message = translate(language, "loadError")

    if state is None:
        state = SharedPlanState(
            language=_default_language(),
            selection_policy=SelectionPolicy.parse(DEFAULT_SELECTION_POLICY, default=SelectionPolicy.WEIGHTED),
        )

    # A changed language or a plan that is not a full week regenerates it (locked slots keep their dish)
    language_changed = lang is not None and language != state.language
    if lang is not None:
        state.language = language
    if len(state.plan) != DAYS_IN_PLAN or language_changed:
        _regenerate(state, menu)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "menu": menu,
            "state": state,
            "state_json": _script_json(state.to_dict()),
            "share_id": share_id,
            "languages": SUPPORTED_LANGUAGES,
            "language": state.language,
            "strings": ui_strings(state.language),
            "strings_json": _script_json(ui_strings(state.language)),
            "notice_message": notice_message,
            "time": _ts(),
        }
    )


# -------------------- API: Menu --------------------
@app.get('/api/menu')
def api_menu():
    """Return the dinner categories and their dishes in spreadsheet order."""
    return load_menu().to_dict()


@app.get('/api/translations/{language}')
def api_translations(language: str):
    """UI strings for a language (unknown codes get the default language)."""
    return ui_strings(normalize_language(language, default=_default_language()))


# -------------------- API: Plan operations --------------------
@app.post('/api/plan/generate')
def api_generate_plan(payload: GenerateRequest):
    """Regenerate every unlocked slot; locked slots keep their dish and id."""
    state = payload.state.to_state()
    menu = load_menu()
    _regenerate(state, menu)
    logger.info("Generated plan: %d locked, policy=%s, language=%s",
                len(state.locked_ids), state.selection_policy.value, state.language)
    return state.to_dict()


@app.post('/api/plan/lock')
def api_toggle_lock(payload: LockToggleRequest):
    state = payload.state.to_state()
    _require_slot(state, payload.slot_id)
    state.locked_ids = toggle_lock(state.locked_ids, payload.slot_id)
    return state.to_dict()


@app.post('/api/plan/edit')
def api_edit_dish(payload: EditDishRequest):
    state = payload.state.to_state()
    _require_slot(state, payload.slot_id)
    if not normalize_dish_input(payload.dish):
        raise HTTPException(status_code=400, detail="Dish name cannot be empty")
    state.plan, committed = edit_dish(state.plan, payload.slot_id, payload.dish)
    return {"state": state.to_dict(), "committed": committed}


@app.post('/api/plan/reorder')
def api_reorder_plan(payload: ReorderRequest):
    state = payload.state.to_state()
    try:
        state.plan = reorder_slots(state.plan, payload.slot_ids, state.language)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return state.to_dict()


@app.post('/api/plan/move')
def api_move_slot(payload: MoveSlotRequest):
    """Drag-and-drop end: move one slot onto another slot's position."""
    state = payload.state.to_state()
    try:
        state.plan = move_slot(state.plan, payload.active_id, payload.over_id, state.language)
    except KeyError:
        raise HTTPException(status_code=404, detail="Slot not found in plan")
    return state.to_dict()


# -------------------- API: Export --------------------
@app.post('/api/plan/text', response_class=PlainTextResponse)
def api_plan_text(payload: PlanExportRequest):
    return PlainTextResponse(plan_as_text(payload.state.to_state().plan))


@app.post('/api/plan/pdf')
def api_plan_pdf(payload: PlanExportRequest):
    state = payload.state.to_state()
    pdf_bytes = generate_pdf_for_plan(state.plan, state.language)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": "attachment; filename=middag_plan.pdf"
        },
    )
