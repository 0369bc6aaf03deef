from typing import Annotated

from fastapi import Depends, Request

from modules.push import PushDispatcher, StatsRegistry


def get_dispatcher(request: Request) -> PushDispatcher:
    """Dispatcher built by the application lifespan."""
    return request.app.state.dispatcher


def get_stats_registry(request: Request) -> StatsRegistry:
    return request.app.state.stats_registry


DispatcherDep = Annotated[PushDispatcher, Depends(get_dispatcher)]
StatsRegistryDep = Annotated[StatsRegistry, Depends(get_stats_registry)]
