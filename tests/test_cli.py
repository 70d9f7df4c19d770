"""Tests for the interactive CLI, its API client and the index builder."""

import io
import json

import httpx
import pytest
from langchain_core.vectorstores import InMemoryVectorStore

from negotiator.cli.__main__ import parse_args
from negotiator.cli.client import NegotiatorAPIClient, NegotiatorAPIError
from negotiator.cli.config import CLIConfig
from negotiator.cli.index import main as index_main
from negotiator.cli.negotiator_cli import NegotiatorCLI
from negotiator.core.catalog import DEFAULT_STORE_FILE

CARRIERS = [
    {"label": "Ups", "value": "ups.com"},
    {"label": "Fedex", "value": "fedex.com"},
]


class FakeAPI:
    """Records chat payloads and answers like the negotiator API."""

    def __init__(self, chat_status: int = 200):
        self.chat_status = chat_status
        self.payloads: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/carriers":
            return httpx.Response(200, json={"carriers": CARRIERS})
        payload = json.loads(request.content)
        self.payloads.append(payload)
        if self.chat_status != 200:
            return httpx.Response(self.chat_status, text="Carrier not found")
        return httpx.Response(200, json={"response": f"re: {payload['message']}"})

    def client(self, config: CLIConfig) -> NegotiatorAPIClient:
        return NegotiatorAPIClient(config, transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def config() -> CLIConfig:
    return CLIConfig(host="testserver", port=8080)


def _run_cli(config, api, lines):
    output = io.StringIO()
    cli = NegotiatorCLI(
        config,
        input_stream=io.StringIO(lines),
        output_stream=output,
        client=api.client(config),
    )
    return cli, output


class TestCLIConfig:
    def test_urls(self, config):
        assert config.base_url == "http://testserver:8080"
        assert config.carriers_url == "http://testserver:8080/api/carriers"
        assert config.chat_url == "http://testserver:8080/api/rates-negotiation-chat"


class TestAPIClient:
    @pytest.mark.asyncio
    async def test_list_carriers(self, config):
        client = FakeAPI().client(config)
        try:
            assert await client.list_carriers() == CARRIERS
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_chat_sends_full_payload(self, config):
        api = FakeAPI()
        client = api.client(config)
        history = [{"role": "user", "content": "hi"}]
        try:
            reply = await client.chat("ups.com", history, "rates?")
        finally:
            await client.close()

        assert reply == "re: rates?"
        assert api.payloads == [
            {"carrier_url": "ups.com", "chat_history": history, "message": "rates?"}
        ]

    @pytest.mark.asyncio
    async def test_error_status_raises(self, config):
        client = FakeAPI(chat_status=404).client(config)
        try:
            with pytest.raises(NegotiatorAPIError) as exc_info:
                await client.chat("dhl.de", [], "hello")
        finally:
            await client.close()

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Carrier not found"


class TestNegotiatorCLI:
    @pytest.mark.asyncio
    async def test_menu_then_chat_keeps_history(self, config):
        api = FakeAPI()
        cli, output = _run_cli(config, api, "1\nhello\nagain\nexit\n")

        await cli.run()

        assert cli.carrier == "ups.com"
        assert [p["message"] for p in api.payloads] == ["hello", "again"]
        assert api.payloads[0]["chat_history"] == []
        assert api.payloads[1]["chat_history"] == [
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "re: hello"},
        ]
        text = output.getvalue()
        assert "1. Ups (ups.com)" in text
        assert "re: again" in text
        assert "Goodbye!" in text

    @pytest.mark.asyncio
    async def test_invalid_choice_reprompts(self, config):
        api = FakeAPI()
        cli, output = _run_cli(config, api, "7\nx\n2\nq\n")

        await cli.run()

        assert cli.carrier == "fedex.com"
        assert output.getvalue().count("Pick a number between 1 and 2.") == 2

    @pytest.mark.asyncio
    async def test_carrier_argument_skips_menu(self, config):
        api = FakeAPI()
        cli, output = _run_cli(config, api, "hello\n")

        await cli.run(carrier="fedex.com")

        assert api.payloads[0]["carrier_url"] == "fedex.com"
        assert "Carrier number" not in output.getvalue()

    @pytest.mark.asyncio
    async def test_failed_turn_not_added_to_history(self, config):
        api = FakeAPI(chat_status=404)
        cli, output = _run_cli(config, api, "hello\nexit\n")

        await cli.run(carrier="dhl.de")

        assert cli.history == []
        assert "Error: HTTP 404: Carrier not found" in output.getvalue()

    @pytest.mark.asyncio
    async def test_eof_ends_session(self, config):
        api = FakeAPI()
        cli, output = _run_cli(config, api, "")

        await cli.run(carrier="ups.com")

        assert api.payloads == []
        assert output.getvalue().endswith("Goodbye!\n")


class TestArgs:
    def test_defaults(self):
        args = parse_args([])
        assert (args.host, args.port, args.carrier, args.debug) == (
            "localhost",
            8000,
            None,
            False,
        )

    def test_overrides(self):
        args = parse_args(["--port", "9000", "--carrier", "ups.com", "--debug"])
        assert args.port == 9000
        assert args.carrier == "ups.com"
        assert args.debug is True


class TestIndexCommand:
    @pytest.fixture(autouse=True)
    def _offline(self, monkeypatch, embeddings):
        monkeypatch.setattr(
            "negotiator.cli.index.get_embeddings", lambda config: embeddings
        )
        monkeypatch.setattr("negotiator.cli.index.setup_logging", lambda config: None)

    def test_builds_store_for_carrier(self, tmp_path, embeddings):
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "rates.md").write_text(
            "Ground discounts.\n\nAir surcharges.", encoding="utf-8"
        )
        base_dir = tmp_path / "negotiation-data"

        code = index_main(["ups.com", str(docs), "--base-dir", str(base_dir)])

        assert code == 0
        store_path = base_dir / "ups.com" / DEFAULT_STORE_FILE
        store = InMemoryVectorStore.load(str(store_path), embeddings)
        assert len(store.store) == 1

    def test_no_documents_fails(self, tmp_path):
        (tmp_path / "empty").mkdir()
        code = index_main(
            ["ups.com", str(tmp_path / "empty"), "--base-dir", str(tmp_path / "out")]
        )
        assert code == 1
        assert not (tmp_path / "out").exists()
