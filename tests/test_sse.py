import asyncio

import orjson

from hamlab.http.routes_codec import publish_decode_events
from hamlab.http.sse import SSEManager
from hamlab.pipelines.codewords import position_mask
from hamlab.pipelines.fec import HammingCodec


async def _next(stream):
    return await stream.__anext__()


def _collect(events, summary, count):
    async def scenario():
        sse = SSEManager()
        stream = sse.subscribe()
        first = asyncio.create_task(_next(stream))
        await asyncio.sleep(0)
        await publish_decode_events(sse, events, summary)
        messages = [await first]
        for _ in range(count - 1):
            messages.append(await stream.__anext__())
        await stream.aclose()
        return messages

    return asyncio.run(scenario())


def _parse(message):
    head, data, tail = message.split("\n", 2)
    assert tail == "\n"
    return head[len("event: "):], orjson.loads(data[len("data: "):])


def test_single_correction_is_published_as_correction_event():
    codec = HammingCodec()
    encoded = bytearray(codec.encode(b"\xFF"))
    encoded[0] ^= position_mask(3)
    result = codec.decode(bytes(encoded))

    messages = _collect(result.events, {"corrected": result.corrected}, 2)

    assert _parse(messages[0]) == (
        "correction",
        {"codeword_index": 0, "byte_index": 0, "kind": "corrected", "position": 3},
    )
    assert _parse(messages[1]) == ("decode", {"corrected": 1})


def test_double_error_is_published_as_uncorrectable_event():
    codec = HammingCodec()
    encoded = bytearray(codec.encode(b"\x05"))
    encoded[1] ^= position_mask(2) | position_mask(6)
    result = codec.decode(bytes(encoded))

    messages = _collect(result.events, {"uncorrectable": result.uncorrectable}, 2)

    name, payload = _parse(messages[0])
    assert name == "uncorrectable"
    assert payload["codeword_index"] == 1
    assert payload["position"] is None
    assert _parse(messages[1]) == ("decode", {"uncorrectable": 1})


def test_publish_without_subscribers_is_noop():
    asyncio.run(publish_decode_events(SSEManager(), [], {"corrected": 0}))
