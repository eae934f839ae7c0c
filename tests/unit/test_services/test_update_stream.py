"""
Test Update Stream
"""

import asyncio
import threading

import pytest
from fluxradar.services.update_stream import STATE_CLOSED, STATE_OPEN, UpdateStream

class FakeConnection:
    """模拟传输层的断开信号"""
    def __init__(self):
        self.disconnected = False

    async def is_disconnected(self):
        return self.disconnected

async def test_stream_emits_frame_per_publish(channel):
    """测试每次通知输出一帧 update"""
    connection = FakeConnection()
    stream = UpdateStream(channel, connection.is_disconnected, poll_interval=0.01)
    frames = stream.frames()

    stream.open()
    assert stream.state == STATE_OPEN
    assert channel.subscriber_count() == 1

    channel.publish()
    channel.publish()

    assert await asyncio.wait_for(frames.__anext__(), timeout=1) == "data: update\n\n"
    assert await asyncio.wait_for(frames.__anext__(), timeout=1) == "data: update\n\n"
    await frames.aclose()

async def test_disconnect_unsubscribes(channel):
    """测试客户端断开后订阅数回到基线"""
    baseline = channel.subscriber_count()
    connection = FakeConnection()
    stream = UpdateStream(channel, connection.is_disconnected, poll_interval=0.01)
    frames = stream.frames()

    pending = asyncio.ensure_future(frames.__anext__())
    await asyncio.sleep(0.05)
    assert channel.subscriber_count() == baseline + 1

    connection.disconnected = True
    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(pending, timeout=1)

    assert channel.subscriber_count() == baseline
    assert stream.state == STATE_CLOSED

async def test_cancellation_unsubscribes(channel):
    """测试生成器被取消时同样取消订阅"""
    connection = FakeConnection()
    stream = UpdateStream(channel, connection.is_disconnected, poll_interval=10)
    frames = stream.frames()

    pending = asyncio.ensure_future(frames.__anext__())
    await asyncio.sleep(0.05)
    assert channel.subscriber_count() == 1

    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert channel.subscriber_count() == 0
    assert stream.state == STATE_CLOSED

async def test_publish_from_other_thread(channel):
    """测试其他线程发布的通知会投递到事件循环"""
    connection = FakeConnection()
    stream = UpdateStream(channel, connection.is_disconnected, poll_interval=0.01)
    frames = stream.frames()
    stream.open()

    worker = threading.Thread(target=channel.publish)
    worker.start()
    worker.join()

    assert await asyncio.wait_for(frames.__anext__(), timeout=1) == "data: update\n\n"
    await frames.aclose()
    assert channel.subscriber_count() == 0

async def test_close_is_idempotent(channel):
    """测试重复关闭不会出错"""
    connection = FakeConnection()
    stream = UpdateStream(channel, connection.is_disconnected)
    stream.open()

    stream.close()
    stream.close()

    assert channel.subscriber_count() == 0
    assert stream.state == STATE_CLOSED
