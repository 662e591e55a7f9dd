"""Basic usage examples for the MIoT Python SDK."""

import asyncio

from miot import AsyncMiotClient
from miot import MiotClient
from miot import PropertyValue
from miot import SetPropertiesRequest
from miot import SubscriptionResult


def basic_client_usage():
    """Read devices and properties, then switch a light on."""

    # Credentials from MIOT_APP_ID / MIOT_ACCESS_TOKEN
    client = MiotClient.from_env(dotenv_path=".env")

    devices = client.devices(compact=True)
    if devices is False or "status" in devices:
        print(f"Request failed: {devices}")
        return

    print(f"Devices: {devices}")

    values = client.properties(["AAAD.1.1", "AAAD.2.3"])
    print(f"Properties: {values}")

    result = client.set_properties(
        SetPropertiesRequest(properties=[PropertyValue(pid="AAAD.1.1", value=True)])
    )
    print(f"Set properties: {result}")


def subscription_usage():
    """Subscribe to property changes and report rejected properties."""

    client = MiotClient(app_id="your_app_id", access_token="your_access_token")

    envelope = client.subscribe(["AAAB.1.1", "AAAC.1.1"], "https://example.com/miot/callback")
    if isinstance(envelope, dict) and "properties" in envelope:
        result = SubscriptionResult.model_validate(envelope)
        print(f"Subscription expires in {result.expired}s")
        for item in result.failed():
            print(f"{item.pid} rejected with status {item.status}")

    client.unsubscribe(["AAAB.1.1", "AAAC.1.1"])


async def async_usage():
    """Use the asyncio client."""

    client = AsyncMiotClient(app_id="your_app_id", access_token="your_access_token")

    homes, scenes = await asyncio.gather(client.homes(), client.scenes())
    print(f"Homes: {homes}")
    print(f"Scenes: {scenes}")


if __name__ == "__main__":
    basic_client_usage()
    subscription_usage()
    asyncio.run(async_usage())
