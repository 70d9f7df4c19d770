"""Interactive CLI loop: pick a carrier, then chat."""

import logging
import sys
from typing import TextIO

import httpx

from negotiator.core.service.models import ROLE_ASSISTANT, ROLE_USER

from .client import NegotiatorAPIClient, NegotiatorAPIError
from .config import CLIConfig

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


class NegotiatorCLI:
    """Interactive CLI for the negotiator API.

    The conversation history lives here, on the client side, and is sent
    in full with every turn.
    """

    def __init__(
        self,
        config: CLIConfig,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        client: NegotiatorAPIClient | None = None,
    ):
        self.config = config
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.client = client or NegotiatorAPIClient(config)
        self.carrier: str | None = None
        self.history: list[dict] = []

    async def run(self, carrier: str | None = None) -> None:
        """Run the interactive CLI loop."""
        try:
            self._print_welcome()
            self.carrier = carrier or await self._choose_carrier()
            if self.carrier is None:
                return
            self._print(f"Negotiating with {self.carrier}.\n\n")

            while True:
                try:
                    message = self._get_user_input()
                    if not message:
                        continue
                    if message.strip().lower() in EXIT_COMMANDS:
                        self._print("Goodbye!\n")
                        break
                    await self._process_message(message)
                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use 'exit' or 'quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.client.close()

    async def _choose_carrier(self) -> str | None:
        try:
            carriers = await self.client.list_carriers()
        except (NegotiatorAPIError, httpx.HTTPError) as e:
            self._print(f"Could not load carriers: {e}\n")
            return None

        if not carriers:
            self._print("No carriers available.\n")
            return None

        for i, entry in enumerate(carriers, 1):
            self._print(f"  {i}. {entry['label']} ({entry['value']})\n")

        while True:
            try:
                choice = self._get_user_input("Carrier number: ").strip()
            except EOFError:
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(carriers):
                return carriers[int(choice) - 1]["value"]
            self._print(f"Pick a number between 1 and {len(carriers)}.\n")

    async def _process_message(self, message: str) -> None:
        """Send one message; only a successful turn is added to history."""
        try:
            reply = await self.client.chat(self.carrier, self.history, message)
        except NegotiatorAPIError as e:
            self._print(f"\nError: {e}\n\n")
            return
        except httpx.HTTPError as e:
            logger.exception("Error sending message")
            self._print(f"\nConnection error: {e}\n\n")
            return

        self.history.append({"role": ROLE_USER, "content": message})
        self.history.append({"role": ROLE_ASSISTANT, "content": reply})
        self._print(f"{reply}\n\n")

    def _get_user_input(self, prompt: str = "> ") -> str:
        """Get user input from the input stream."""
        self._print(prompt)
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("Negotiator CLI - carrier rates negotiation chat\n")
        self._print(f"Connected to: {self.config.base_url}\n")
        self._print("Type 'exit' or 'quit' to exit.\n\n")

    def _print(self, text: str) -> None:
        """Print text to output stream."""
        self.output_stream.write(text)
        self.output_stream.flush()


async def main(
    host: str = "localhost",
    port: int = 8000,
    carrier: str | None = None,
    debug: bool = False,
) -> None:
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = CLIConfig(host=host, port=port)
    cli = NegotiatorCLI(config)
    await cli.run(carrier)
