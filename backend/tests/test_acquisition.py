import asyncio

from farmwatch.services.acquisition import DataAcquisitionLoop, acquire_once
from farmwatch.services.mock_data import MockDataGenerator
from fakes import StubConnector, make_reading


def test_acquire_once_mock_mode_skips_device(mock_config):
    connector = StubConnector(reading=make_reading())

    result = acquire_once(mock_config, connector, MockDataGenerator())

    assert result.source == "mock"
    assert connector.calls == 0


def test_acquire_once_uses_device_reading(device_config):
    reading = make_reading(temperature=22.5)
    connector = StubConnector(reading=reading)

    result = acquire_once(device_config, connector, MockDataGenerator())

    assert result.source == "device"
    assert result.reading is reading
    assert connector.calls == 1


def test_acquire_once_falls_back_to_mock(device_config):
    connector = StubConnector(reading=None, error="connection timed out")

    result = acquire_once(device_config, connector, MockDataGenerator())

    assert result.source == "mock"
    assert 25.0 <= result.reading.temperature <= 31.0
    assert connector.state.connected is False
    assert connector.last_error == "connection timed out"


def test_refresh_publishes_to_subscribers(device_config):
    reading = make_reading(temperature=21.0)
    loop = DataAcquisitionLoop(device_config, StubConnector(reading=reading))
    published = []
    loop.subscribe(published.append)

    result = asyncio.run(loop.refresh())

    assert result.source == "device"
    assert loop.current_reading is reading
    assert loop.last_result is result
    assert loop.recent_readings == [reading]
    assert published == [result]
    assert loop.connection_state.connected is True


def test_fallback_keeps_failure_reason_observable(device_config):
    loop = DataAcquisitionLoop(device_config, StubConnector(reading=None, error="device unreachable"))

    result = asyncio.run(loop.refresh())

    assert result.source == "mock"
    assert loop.current_reading is result.reading
    assert loop.connection_state.connected is False
    assert loop.connection_state.last_error == "device unreachable"


def test_concurrent_refreshes_share_one_cycle(device_config):
    connector = StubConnector(reading=make_reading(), delay=0.1)
    loop = DataAcquisitionLoop(device_config, connector)

    async def scenario():
        return await asyncio.gather(loop.refresh(), loop.refresh(), loop.refresh())

    results = asyncio.run(scenario())

    assert connector.calls == 1
    assert results[0] is results[1] is results[2]


def test_failing_listener_does_not_break_refresh(mock_config):
    loop = DataAcquisitionLoop(mock_config, StubConnector())
    published = []

    def broken(result):
        raise RuntimeError("boom")

    loop.subscribe(broken)
    loop.subscribe(published.append)

    result = asyncio.run(loop.refresh())

    assert published == [result]


def test_mock_mode_polls_every_interval_without_device(mock_config):
    connector = StubConnector(reading=make_reading())
    loop = DataAcquisitionLoop(mock_config, connector, poll_interval=0.05)
    published = []
    loop.subscribe(published.append)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.32)
        await loop.stop()

    asyncio.run(scenario())

    assert connector.calls == 0
    assert len(published) >= 4
    assert all(result.source == "mock" for result in published)


def test_offline_pauses_polling(mock_config):
    loop = DataAcquisitionLoop(mock_config, StubConnector(), poll_interval=0.05)
    published = []
    loop.subscribe(published.append)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.12)
        loop.set_online(False)
        await asyncio.sleep(0.15)
        paused_count = len(published)
        await asyncio.sleep(0.25)
        await loop.stop()
        return paused_count

    paused_count = asyncio.run(scenario())

    assert paused_count >= 1
    assert len(published) == paused_count
    assert loop.online is False


def test_coming_online_acquires_immediately(mock_config):
    loop = DataAcquisitionLoop(mock_config, StubConnector(), poll_interval=30, online=False)
    published = []
    loop.subscribe(published.append)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.1)
        before = len(published)
        loop.set_online(True)
        await asyncio.sleep(0.2)
        after = len(published)
        await loop.stop()
        return before, after

    before, after = asyncio.run(scenario())

    assert before == 0
    assert after == 1


def test_manual_refresh_while_running(mock_config):
    loop = DataAcquisitionLoop(mock_config, StubConnector(), poll_interval=30)
    published = []
    loop.subscribe(published.append)

    async def scenario():
        loop.start()
        await asyncio.sleep(0.1)
        await loop.refresh()
        running = loop.running
        await loop.stop()
        return running

    assert asyncio.run(scenario()) is True
    assert len(published) == 2


def test_update_config_switches_source(mock_config, device_config):
    connector = StubConnector(reading=make_reading())
    loop = DataAcquisitionLoop(mock_config, connector)

    assert asyncio.run(loop.refresh()).source == "mock"
    loop.update_config(device_config)
    assert asyncio.run(loop.refresh()).source == "device"
    assert connector.calls == 1
    assert loop.config is device_config


def test_recent_buffer_is_bounded(mock_config):
    loop = DataAcquisitionLoop(mock_config, StubConnector(), buffer_size=3)

    async def scenario():
        for _ in range(5):
            await loop.refresh()

    asyncio.run(scenario())

    assert len(loop.recent_readings) == 3
    assert loop.recent_readings[-1] is loop.current_reading
