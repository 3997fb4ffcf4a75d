"""BlockfrostApi のユニットテスト（respx モック）"""

import asyncio

import httpx
import pytest
import respx
from blockfrost_client.client import BlockfrostApi
from blockfrost_client.constants import CARDANO_MAINNET, USER_AGENT
from blockfrost_client.exceptions import ApiError, TransportError
from blockfrost_client.lister import StepKind
from blockfrost_client.models import AffectedAddress, Block, Order, Pagination, TxHash
from blockfrost_client.settings import Settings

BASE_URL = CARDANO_MAINNET
PROJECT_ID = "mainnetTESTKEY"

BLOCK = {
    "time": 1641338934,
    "height": 15243593,
    "hash": "4ea1ba291e8eef538635a53e59fddba7810d1679631cc3aed7c8e6c4091a516a",
    "slot": 412162133,
    "epoch": 425,
    "epoch_slot": 12,
    "slot_leader": "pool1pu5jlj4q9w9jlxeu370a3c9myx47md5j5m2str0naunn2qnikdy",
    "size": 3,
    "tx_count": 1,
    "output": "128314491794",
    "fees": "592661",
    "block_vrf": "vrf_vk1wf2k6lhujezqcfe00l6zetxpnmh9n6mwhpmhm0dvfh3fxgmdnrfqkms8ty",
    "previous_block": "43ebccb3ac72c7cebd0d9b755a4b08412c9f5dcb81b8a0ad1e3c197d29d47b05",
    "next_block": "8367f026cf4b03e116ff8ee5daf149b55ba5a6ec6dec04803b8dc317721d15fa",
    "confirmations": 4698,
}


def make_api() -> BlockfrostApi:
    return BlockfrostApi(Settings(project_id=PROJECT_ID))


def paged_route(path: str, pages: dict[int, list]) -> respx.Route:
    """page クエリに応じて pages の内容を返すルート。未定義のページは空配列。"""

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        return httpx.Response(200, json=pages.get(page, []))

    return respx.get(f"{BASE_URL}{path}").mock(side_effect=handler)


@respx.mock
async def test_headers_are_sent() -> None:
    """project_id と User-Agent ヘッダーが付与されること。"""
    route = respx.get(f"{BASE_URL}/health").mock(return_value=httpx.Response(200, json={"is_healthy": True}))

    async with make_api() as api:
        health = await api.health()

    assert health.is_healthy is True
    request = route.calls.last.request
    assert request.headers["project_id"] == PROJECT_ID
    assert request.headers["User-Agent"] == USER_AGENT


@respx.mock
async def test_root_and_clock() -> None:
    """ルートと時刻エンドポイント。"""
    respx.get(f"{BASE_URL}/").mock(
        return_value=httpx.Response(200, json={"url": "https://blockfrost.io/", "version": "0.1.0"})
    )
    respx.get(f"{BASE_URL}/health/clock").mock(
        return_value=httpx.Response(200, json={"server_time": 1603400958947})
    )

    async with make_api() as api:
        root = await api.root()
        clock = await api.health_clock()

    assert root.version == "0.1.0"
    assert clock.server_time == 1603400958947


@respx.mock
async def test_blocks_single_value_endpoints() -> None:
    """単一ブロックを返すエンドポイント。"""
    respx.get(f"{BASE_URL}/blocks/latest").mock(return_value=httpx.Response(200, json=BLOCK))
    respx.get(f"{BASE_URL}/blocks/15243593").mock(return_value=httpx.Response(200, json=BLOCK))
    respx.get(f"{BASE_URL}/blocks/slot/412162133").mock(return_value=httpx.Response(200, json=BLOCK))
    respx.get(f"{BASE_URL}/blocks/epoch/425/slot/12").mock(return_value=httpx.Response(200, json=BLOCK))

    async with make_api() as api:
        blocks = [
            await api.blocks_latest(),
            await api.blocks_by_id("15243593"),
            await api.blocks_slot(412162133),
            await api.blocks_by_epoch_and_slot(425, 12),
        ]

    assert all(isinstance(b, Block) for b in blocks)
    assert {b.hash for b in blocks} == {BLOCK["hash"]}


@respx.mock
async def test_paged_endpoint_single_page() -> None:
    """ページ指定付きの単一ページ取得。"""
    route = respx.get(f"{BASE_URL}/blocks/abc/addresses").mock(
        return_value=httpx.Response(
            200,
            json=[{"address": "addr1q9ld", "transactions": [{"tx_hash": "1a0570af"}]}],
        )
    )

    async with make_api() as api:
        page = await api.blocks_affected_addresses("abc", Pagination(page=3, count=1))

    assert page == [AffectedAddress(address="addr1q9ld", transactions=[TxHash(tx_hash="1a0570af")])]
    assert route.calls.last.request.url.params["page"] == "3"


@respx.mock
async def test_lister_two_items_then_empty_page() -> None:
    """count=2 で 1 ページ目 2 件、2 ページ目 0 件なら 2 件だけ返して終了すること。"""
    route = paged_route("/blocks/latest/txs", {1: ["tx1", "tx2"]})

    async with make_api() as api:
        assert await api.blocks_latest_txs(Pagination(page=1, count=2)) == ["tx1", "tx2"]
        assert await api.blocks_latest_txs(Pagination(page=2, count=2)) == []

        lister = api.blocks_latest_txs_all(count=2)
        items = [item async for item in lister.items()]

    assert items == ["tx1", "tx2"]
    lister_calls = route.calls[2:]
    assert [c.request.url.params["page"] for c in lister_calls] == ["1", "2"]
    assert all(c.request.url.params["count"] == "2" for c in lister_calls)


@respx.mock
async def test_lister_first_pages_only() -> None:
    """先頭 2 ページだけ取れば 2 回しか呼ばないこと。"""
    route = paged_route("/blocks/abc/next", {n: [BLOCK] for n in range(1, 6)})

    async with make_api() as api:
        pages = [page async for page in api.blocks_next_all("abc", count=1).pages(limit=2)]

    assert len(pages) == 2
    assert route.call_count == 2


@respx.mock
async def test_lister_stops_at_api_error() -> None:
    """途中のページでエラーなら以降のページを取得しないこと。"""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["page"] == "2":
            return httpx.Response(
                429,
                json={"status_code": 429, "error": "Too Many Requests", "message": "Rate limited"},
            )
        return httpx.Response(200, json=["h1"])

    route = respx.get(f"{BASE_URL}/blocks/abc/txs").mock(side_effect=handler)

    async with make_api() as api:
        lister = api.blocks_txs_all("abc", count=1, order=Order.DESC)
        first = await lister.advance()
        second = await lister.advance()
        third = await lister.advance()

    assert first.items == ["h1"]
    assert second.kind is StepKind.ERROR
    assert isinstance(second.error, ApiError)
    assert second.error.status_code == 429
    assert third.kind is StepKind.END
    assert route.call_count == 2
    assert route.calls.last.request.url.params["order"] == "desc"


@respx.mock
async def test_concurrent_listers_share_transport() -> None:
    """複数の Lister を同じクライアントで並行実行できること。"""
    paged_route("/blocks/a/previous", {1: [BLOCK], 2: [BLOCK]})
    paged_route("/blocks/b/previous", {1: [BLOCK]})

    async with make_api() as api:
        a, b = await asyncio.gather(
            api.blocks_previous_all("a", count=1).collect(),
            api.blocks_previous_all("b", count=1).collect(),
        )

    assert len(a) == 2
    assert len(b) == 1


@respx.mock
async def test_generic_lister_with_start_page() -> None:
    """lister() で任意のパスと開始ページを指定できること。"""
    route = paged_route("/custom/things", {2: [1, 2], 3: [3]})

    async with make_api() as api:
        items = await api.lister("/custom/things", int, count=2, start_page=2).collect()

    assert items == [1, 2, 3]
    assert [c.request.url.params["page"] for c in route.calls] == ["2", "3", "4"]


@respx.mock
async def test_error_from_single_call() -> None:
    """単一呼び出しのエラーは呼び出し元にそのまま届くこと。"""
    respx.get(f"{BASE_URL}/blocks/latest").mock(return_value=httpx.Response(403, text="Forbidden"))

    async with make_api() as api:
        with pytest.raises(ApiError) as exc_info:
            await api.blocks_latest()

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Forbidden"


async def test_external_http_client_is_not_closed() -> None:
    """外部から渡した httpx クライアントは閉じないこと。"""
    http_client = httpx.AsyncClient()
    async with BlockfrostApi(Settings(project_id=PROJECT_ID), http_client=http_client):
        pass
    assert not http_client.is_closed
    await http_client.aclose()


@respx.mock
async def test_hash_or_number_is_escaped() -> None:
    """hash_or_number の / ? # がパスやクエリを変えないこと。"""
    route = respx.route(method="GET", host="cardano-mainnet.blockfrost.io").mock(
        return_value=httpx.Response(200, json=[])
    )

    async with make_api() as api:
        await api.blocks_txs("a/b?page=9#x")

    request = route.calls.last.request
    assert request.url.raw_path == b"/api/v0/blocks/a%2Fb%3Fpage%3D9%23x/txs"
    assert request.url.query == b""


@respx.mock
async def test_invalid_url_is_transport_error() -> None:
    """URL に制御文字があれば TransportError になること。"""
    async with make_api() as api:
        with pytest.raises(TransportError) as exc_info:
            await api.call_endpoint("/blocks/a\x00b", Block)

    assert isinstance(exc_info.value.reason, httpx.InvalidURL)


@respx.mock
async def test_invalid_url_ends_lister_with_error_step() -> None:
    """Lister では不正 URL がタグ付きの ERROR として返ること。"""
    async with make_api() as api:
        lister = api.lister("/blocks/a\x00b/txs", str)
        step = await lister.advance()

    assert step.kind is StepKind.ERROR
    assert isinstance(step.error, TransportError)
    assert (await lister.advance()).kind is StepKind.END
