"""
Dependency injection container for the application.
Builds every agent once per app and hands them to routes via FastAPI Depends.
"""

import random
import time
from dataclasses import dataclass, field

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from agriswarm.core.config import Settings
from agriswarm.core.database import build_engine, build_session_factory
from agriswarm.services.history import HistoryBuffer
from agriswarm.services.market_service import MarketAdvisor
from agriswarm.services.notification_service import NotificationService
from agriswarm.services.resource_service import ResourceAllocator
from agriswarm.services.sensor_service import EnvironmentSampler
from agriswarm.services.storage_service import StorageService
from agriswarm.services.workflow_service import AgriSwarmWorkflow


@dataclass
class Container:
    settings: Settings
    engine: Engine
    storage: StorageService
    notifier: NotificationService
    readings: HistoryBuffer
    prices: HistoryBuffer
    market_advisor: MarketAdvisor
    workflow: AgriSwarmWorkflow
    started_at: float = field(default_factory=time.monotonic)


def build_container(settings: Settings) -> Container:
    engine = build_engine(settings.DATABASE_URL)
    storage = StorageService(build_session_factory(engine))
    notifier = NotificationService()

    readings = HistoryBuffer(settings.READING_HISTORY_SIZE)
    prices = HistoryBuffer(settings.PRICE_HISTORY_SIZE)

    market_advisor = MarketAdvisor(history=prices, crop=settings.CROP, base_price=settings.BASE_PRICE)
    workflow = AgriSwarmWorkflow(
        sampler=EnvironmentSampler(rng=random.Random(settings.RANDOM_SEED)),
        readings=readings,
        allocator=ResourceAllocator(
            water_pool_l=settings.WATER_POOL_L,
            fertilizer_pool_kg=settings.FERTILIZER_POOL_KG,
            labor_pool=settings.LABOR_POOL,
        ),
        market_advisor=market_advisor,
        storage=storage,
        notifier=notifier,
        persist_readings=settings.PERSIST_READINGS,
    )

    return Container(
        settings=settings,
        engine=engine,
        storage=storage,
        notifier=notifier,
        readings=readings,
        prices=prices,
        market_advisor=market_advisor,
        workflow=workflow,
    )


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_workflow(container: Container = Depends(get_container)) -> AgriSwarmWorkflow:
    return container.workflow
