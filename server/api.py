"""FastAPI server exposing the planner, wardrobe and trends views."""

from fastapi import BackgroundTasks, FastAPI, HTTPException, Query

from logic.validation import CalendarEventCreate, GenerateRequest, PlannerUpdate, WardrobeItemCreate
from models.mood import MOODS
from models.seed_data import OCCASION_PRESETS, TRENDS
from stylist_app.app import WardrobePlannerApp
from stylist_app.errors import ConfigurationMissing, GenerationFailed, PlanInProgress
from stylist_app.logging_config import configure_logging


def create_app(planner_app: WardrobePlannerApp | None = None) -> FastAPI:
    """Build the FastAPI instance around one shell instance."""

    shell = planner_app or WardrobePlannerApp()
    planner = shell.planner
    api = FastAPI(title="Throw Something Together", version="0.1.0")
    api.state.shell = shell

    @api.get("/healthz")
    def healthcheck() -> dict:
        """Readiness probe."""

        return {
            "status": "ok",
            "service": "throw-together",
            "environment": shell.config.environment or "local",
            "text_model": shell.config.text_model,
            "image_model": shell.config.image_model,
            "api_key_configured": shell.config.has_api_key,
        }

    @api.get("/view")
    def current_view() -> dict:
        return shell.render_view()

    @api.put("/view/{name}")
    def switch_view(name: str) -> dict:
        try:
            shell.switch_view(name)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return shell.render_view()

    @api.get("/wardrobe")
    def list_wardrobe() -> list:
        return [item.to_dict() for item in shell.state.inventory]

    @api.post("/wardrobe", status_code=201)
    def add_wardrobe_item(request: WardrobeItemCreate) -> dict:
        try:
            added = shell.create_item(
                category=request.category,
                name=request.name,
                color=request.color,
                image_url=request.image_url,
                tags=request.tags,
                brand=request.brand,
                item_id=request.id,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return added.to_dict()

    @api.post("/wardrobe/simulate-upload", status_code=201)
    def simulate_upload() -> dict:
        return shell.add_item().to_dict()

    @api.get("/moods")
    def list_moods() -> list:
        return [mood.to_dict() for mood in MOODS]

    @api.get("/occasions")
    def list_occasions() -> list:
        return OCCASION_PRESETS

    @api.get("/trends")
    def list_trends() -> list:
        return [trend.to_dict() for trend in TRENDS]

    @api.get("/events")
    def list_events(date: str | None = Query(None, description="Exact YYYY-MM-DD match")) -> list:
        events = shell.state.events_for(date) if date else shell.state.events
        return [event.to_dict() for event in events]

    @api.post("/events", status_code=201)
    def add_event(request: CalendarEventCreate) -> dict:
        try:
            event = planner.add_event(
                request.title, time_label=request.time, occasion=request.type, on_date=request.date
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return event.to_dict()

    @api.delete("/events/{event_id}")
    def remove_event(event_id: str) -> dict:
        if not planner.remove_event(event_id):
            raise HTTPException(status_code=404, detail=f"Unknown event {event_id}")
        return {"status": "ok", "removed": event_id}

    @api.post("/calendar/sync")
    def sync_calendar() -> dict:
        events = planner.sync_calendar()
        return {"status": "ok", "event_count": len(events), "calendar_connected": planner.calendar_connected}

    @api.get("/planner")
    def planner_state() -> dict:
        return planner.snapshot()

    @api.put("/planner")
    def update_planner(request: PlannerUpdate) -> dict:
        try:
            if request.mood is not None:
                planner.select_mood(request.mood)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if request.location is not None:
            planner.set_location(request.location)
        if request.custom_request is not None:
            planner.set_custom_request(request.custom_request)
        if request.target_date is not None:
            planner.set_target_date(request.target_date)
        return planner.snapshot()

    @api.post("/planner/locate")
    def locate() -> dict:
        resolved = planner.use_current_location()
        message = None if resolved else "Could not get location. Please enter manually."
        return {"resolved": resolved, "location": planner.location, "message": message}

    @api.post("/planner/generate")
    def generate(background_tasks: BackgroundTasks, request: GenerateRequest | None = None) -> dict:
        """Return the text recommendation now; the image follows in the background."""

        confirm_default_day = request.confirm_default_day if request else False
        prompts: list = []

        def confirm(message: str) -> bool:
            prompts.append(message)
            return confirm_default_day

        try:
            recommendation = planner.request_plan(confirm)
        except ConfigurationMissing as exc:
            raise HTTPException(status_code=503, detail=exc.message) from exc
        except PlanInProgress as exc:
            raise HTTPException(status_code=409, detail=exc.message) from exc
        except GenerationFailed as exc:
            raise HTTPException(status_code=502, detail=exc.message) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        if recommendation is None:
            return {"status": "needs_confirmation", "message": prompts[-1] if prompts else None}

        background_tasks.add_task(planner.complete_visual)
        return {"status": "text_ready", "recommendation": recommendation.to_dict(), "image_pending": True}

    return api


configure_logging()
app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
