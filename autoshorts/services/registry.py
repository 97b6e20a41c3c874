"""
Service registry - builds and shares the application's collaborators.

Routes depend on the ``get_*`` functions below through FastAPI ``Depends``,
so tests can replace any of them with ``app.dependency_overrides``.
"""

from dataclasses import dataclass
from typing import Optional

from autoshorts.config import DEFAULT_EVENING_SLOT, DEFAULT_MORNING_SLOT
from autoshorts.models.automation import AutomationConfig, parse_slot_time
from autoshorts.services.infrastructure.keys import ApiKeyPool, RotatingCallExecutor
from autoshorts.services.infrastructure.llm.gemini import GeminiGateway
from autoshorts.services.infrastructure.orchestration import JobLedger, get_job_ledger
from autoshorts.services.infrastructure.storage import FileArtifactStore, StudioStateStore
from autoshorts.services.pipeline import GenerationPipeline
from autoshorts.services.pipeline.audio import VoiceSynthesizer
from autoshorts.services.pipeline.script_generation import ScriptGenerator
from autoshorts.services.pipeline.video import ClipRenderer
from autoshorts.services.scheduler import AutomationRunner, CatchUpScheduler


@dataclass
class Services:
    key_pool: ApiKeyPool
    executor: RotatingCallExecutor
    gateway: GeminiGateway
    state: StudioStateStore
    ledger: JobLedger
    script_generator: ScriptGenerator
    renderer: ClipRenderer
    pipeline: GenerationPipeline
    scheduler: CatchUpScheduler
    runner: AutomationRunner


def default_automation_config() -> AutomationConfig:
    return AutomationConfig(
        morning_slot=parse_slot_time(DEFAULT_MORNING_SLOT),
        evening_slot=parse_slot_time(DEFAULT_EVENING_SLOT),
    )


def build_services(
    key_pool: Optional[ApiKeyPool] = None,
    gateway: Optional[GeminiGateway] = None,
    state: Optional[StudioStateStore] = None,
    ledger: Optional[JobLedger] = None,
    artifacts: Optional[FileArtifactStore] = None,
) -> Services:
    """Wire every collaborator; any argument left out gets its production default."""
    key_pool = key_pool if key_pool is not None else ApiKeyPool.from_env()
    gateway = gateway or GeminiGateway()
    state = state or StudioStateStore(default_automation=default_automation_config())
    ledger = ledger or get_job_ledger()
    artifacts = artifacts or FileArtifactStore()

    executor = RotatingCallExecutor(key_pool)
    script_generator = ScriptGenerator(executor, gateway)
    renderer = ClipRenderer(executor, gateway)
    pipeline = GenerationPipeline(
        script_generator=script_generator,
        voice=VoiceSynthesizer(executor, gateway),
        renderer=renderer,
        artifacts=artifacts,
        ledger=ledger,
        state=state,
    )
    scheduler = CatchUpScheduler(state)
    pipeline.slot_listener = scheduler
    runner = AutomationRunner(scheduler, pipeline)

    return Services(
        key_pool=key_pool,
        executor=executor,
        gateway=gateway,
        state=state,
        ledger=ledger,
        script_generator=script_generator,
        renderer=renderer,
        pipeline=pipeline,
        scheduler=scheduler,
        runner=runner,
    )


_services_instance: Optional[Services] = None


def get_services() -> Services:
    """Get the shared Services instance (singleton pattern)."""
    global _services_instance
    if _services_instance is None:
        _services_instance = build_services()
    return _services_instance


def set_services(services: Optional[Services]) -> None:
    global _services_instance
    _services_instance = services


def get_key_pool() -> ApiKeyPool:
    return get_services().key_pool


def get_pipeline() -> GenerationPipeline:
    return get_services().pipeline


def get_ledger() -> JobLedger:
    return get_services().ledger


def get_state_store() -> StudioStateStore:
    return get_services().state


def get_scheduler() -> CatchUpScheduler:
    return get_services().scheduler


def get_runner() -> AutomationRunner:
    return get_services().runner


def get_script_generator() -> ScriptGenerator:
    return get_services().script_generator


def get_renderer() -> ClipRenderer:
    return get_services().renderer
