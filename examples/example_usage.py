"""Example: drive the check-in engine directly (without Flask).

Controllers stay thin; the decision logic lives in the orchestrator.
"""

import asyncio
import importlib
import sys

from config import get_settings_module

from src.checkin_engine.checkin_engine.checkin.position import SubmittedPositionSource
from src.checkin_engine.checkin_engine.container import build_container


async def main(user_id: str, latitude: float, longitude: float) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    session = container.open_session(user_id)
    result = await container.orchestrator.attempt_check_in(
        session,
        user_id,
        "location",
        positions=SubmittedPositionSource({"latitude": latitude, "longitude": longitude}),
    )
    print(result.to_dict())
    print(await container.orchestrator.get_daily_state(user_id))


if __name__ == "__main__":
    uid, lat, lng = sys.argv[1], float(sys.argv[2]), float(sys.argv[3])
    asyncio.run(main(uid, lat, lng))
