"""Unit tests for the image commands.

Tests for `tagwatch image list|inspect|remove|prune` against a fake
inventory service.
"""

import json
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import patch

import pytest
from tagwatch.cli.commands.image import PRUNE_ALL_WARNING, should_proceed
from tagwatch.cli.main import app
from tagwatch.inventory.client import InventoryClient
from typer.testing import CliRunner

runner = CliRunner(env={"COLUMNS": "200"})

ManifestFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def client_authorities(inventory_server: Any) -> Iterator[list[str]]:
    """Route every InventoryClient built by the commands to the fake server.

    Yields the list of authorities the commands connected to.
    """
    authorities: list[str] = []

    def make_client(authority: str) -> InventoryClient:
        authorities.append(authority)
        return InventoryClient(authority, transport=inventory_server.transport)

    with patch("tagwatch.cli.commands.image.InventoryClient", side_effect=make_client):
        yield authorities


def _rows(output: str, *names: str) -> list[int]:
    """Positions of each name in the output."""
    return [output.index(name) for name in names]


class TestImageHelp:
    """Tests for image command help."""

    def test_image_help(self) -> None:
        """Image command lists its subcommands."""
        result = runner.invoke(app, ["image", "--help"])
        assert result.exit_code == 0
        for command in ("list", "inspect", "remove", "prune"):
            assert command in result.stdout

    def test_list_help_shows_options(self) -> None:
        """List help shows --raw and --grpc-authority."""
        result = runner.invoke(app, ["image", "list", "--help"])
        assert result.exit_code == 0
        assert "--raw" in result.stdout
        assert "--grpc-authority" in result.stdout


@pytest.mark.usefixtures("client_authorities")
class TestImageList:
    """Tests for `tagwatch image list`."""

    def test_rows_sorted_case_insensitively(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """alpine is listed before Zebra and the footer counts 2 images."""
        inventory_server.reply(
            "ImageList",
            {
                "images": [
                    {
                        "name": "Zebra",
                        "manifestsCount": "3",
                        "latest": manifest_payload("v3", digest="sha256:zzz999"),
                    },
                    {
                        "name": "alpine",
                        "manifestsCount": "1",
                        "latest": manifest_payload("3.19", digest="sha256:aaa111"),
                    },
                ]
            },
        )

        result = runner.invoke(app, ["image", "list"])

        assert result.exit_code == 0
        alpine, zebra = _rows(result.stdout, "alpine", "Zebra")
        assert alpine < zebra
        assert "Latest Digest" in result.stdout
        assert "sha256:aaa111" in result.stdout
        assert "2024-01-02T03:04:05Z" in result.stdout
        footer = result.stdout.splitlines()[-2]
        assert "Total" in footer
        assert "2" in footer

    def test_same_output_for_any_server_order(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """Two server orderings of the same set render identically."""
        images = [
            {"name": name, "manifestsCount": "1", "latest": manifest_payload("latest")}
            for name in ("beta", "Alpha", "gamma")
        ]
        inventory_server.reply("ImageList", {"images": images})
        first = runner.invoke(app, ["image", "list"])
        inventory_server.reply("ImageList", {"images": list(reversed(images))})
        second = runner.invoke(app, ["image", "list"])

        assert first.exit_code == second.exit_code == 0
        assert first.stdout == second.stdout

    def test_empty_database_message(self, inventory_server: Any) -> None:
        """No image yields a short message instead of a table."""
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(app, ["image", "list"])

        assert result.exit_code == 0
        assert "No image found in the database" in result.stdout
        assert "Total" not in result.stdout

    def test_raw_output_is_sorted_json(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """--raw prints the sorted response as JSON."""
        inventory_server.reply(
            "ImageList",
            {
                "images": [
                    {"name": "zeta", "manifestsCount": "2", "latest": manifest_payload("b")},
                    {"name": "Eta", "manifestsCount": "1", "latest": manifest_payload("a")},
                ]
            },
        )

        result = runner.invoke(app, ["image", "list", "--raw"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [image["name"] for image in data["images"]] == ["Eta", "zeta"]
        assert data["images"][0]["manifestsCount"] == 1

    def test_raw_output_when_empty(self, inventory_server: Any) -> None:
        """--raw prints the empty payload rather than a message."""
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(app, ["image", "list", "--raw"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"images": []}

    def test_image_without_subcommand_lists(self, inventory_server: Any) -> None:
        """`tagwatch image` defaults to list."""
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(app, ["image"])

        assert result.exit_code == 0
        assert "No image found in the database" in result.stdout
        assert inventory_server.methods == ["ImageList"]

    def test_remote_error_fails(self, inventory_server: Any) -> None:
        """A remote error terminates the command with a non-zero status."""
        inventory_server.reply(
            "ImageList", {"code": "internal", "message": "db locked"}, status_code=500
        )

        result = runner.invoke(app, ["image", "list"])

        assert result.exit_code == 1
        assert "internal: db locked" in result.output


class TestGrpcAuthority:
    """Tests for server address resolution."""

    def test_default_authority(
        self, inventory_server: Any, client_authorities: list[str], tmp_path: Any
    ) -> None:
        """Without option or config, the default address is used."""
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.toml"), "image", "list"]
        )

        assert result.exit_code == 0
        assert client_authorities == ["127.0.0.1:42286"]

    def test_option_overrides_default(
        self, inventory_server: Any, client_authorities: list[str]
    ) -> None:
        """--grpc-authority selects the server."""
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(app, ["image", "list", "--grpc-authority", "10.0.0.5:9000"])

        assert result.exit_code == 0
        assert client_authorities == ["10.0.0.5:9000"]

    def test_config_file_authority(
        self, inventory_server: Any, client_authorities: list[str], tmp_path: Any
    ) -> None:
        """The config file address is used when no option is given."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[client]\ngrpc_authority = "db.internal:42286"\n')
        inventory_server.reply("ImageList", {"images": []})

        result = runner.invoke(app, ["--config", str(config_file), "image", "list"])

        assert result.exit_code == 0
        assert client_authorities == ["db.internal:42286"]

    def test_invalid_config_fails(self, client_authorities: list[str], tmp_path: Any) -> None:
        """An invalid config file is reported and nothing is called."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[client\n")

        result = runner.invoke(app, ["--config", str(config_file), "image", "list"])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output
        assert client_authorities == []


@pytest.mark.usefixtures("client_authorities")
class TestImageInspect:
    """Tests for `tagwatch image inspect`."""

    def test_requires_image(self) -> None:
        """--image is mandatory."""
        result = runner.invoke(app, ["image", "inspect"])
        assert result.exit_code != 0

    def test_manifests_most_recent_first(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """Manifests are listed by descending creation time with a count footer."""
        inventory_server.reply(
            "ImageInspect",
            {
                "image": {
                    "name": "alpine",
                    "manifests": [
                        manifest_payload("old-tag", created="2022-05-01T00:00:00Z"),
                        manifest_payload("new-tag", created="2024-05-01T00:00:00Z"),
                        manifest_payload("mid-tag", created="2023-05-01T00:00:00Z"),
                    ],
                }
            },
        )

        result = runner.invoke(app, ["image", "inspect", "--image", "alpine"])

        assert result.exit_code == 0
        new, mid, old = _rows(result.stdout, "new-tag", "mid-tag", "old-tag")
        assert new < mid < old
        footer = result.stdout.splitlines()[-2]
        assert "Total" in footer
        assert "3" in footer
        assert "Size" not in result.stdout

    def test_raw_output(self, inventory_server: Any, manifest_payload: ManifestFactory) -> None:
        """--raw prints the sorted image as JSON."""
        inventory_server.reply(
            "ImageInspect",
            {
                "image": {
                    "name": "alpine",
                    "manifests": [
                        manifest_payload("a", created="2020-01-01T00:00:00Z"),
                        manifest_payload("b", created="2021-01-01T00:00:00Z"),
                    ],
                }
            },
        )

        result = runner.invoke(app, ["image", "inspect", "--image", "alpine", "--raw"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["tag"] for m in data["image"]["manifests"]] == ["b", "a"]

    def test_unknown_image(self, inventory_server: Any) -> None:
        """An unknown image fails with the server's message."""
        inventory_server.reply(
            "ImageInspect", {"code": "not_found", "message": "image not found"}, status_code=404
        )

        result = runner.invoke(app, ["image", "inspect", "--image", "nope"])

        assert result.exit_code == 1
        assert "not_found: image not found" in result.output


@pytest.mark.usefixtures("client_authorities")
class TestImageRemove:
    """Tests for `tagwatch image remove`."""

    def test_removed_manifests_with_sizes(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """Removed manifests are listed with sizes and an aggregate footer."""
        inventory_server.reply(
            "ImageRemove",
            {
                "manifests": [
                    manifest_payload("1.0", size=1000),
                    manifest_payload("1.1", size=500),
                ]
            },
        )

        result = runner.invoke(app, ["image", "remove", "--image", "alpine"])

        assert result.exit_code == 0
        assert "Size" in result.stdout
        assert "1kB" in result.stdout
        assert "500B" in result.stdout
        assert "2 (1.5kB)" in result.stdout
        assert inventory_server.methods == ["ImageRemove"]

    def test_no_confirmation_prompt(
        self, inventory_server: Any, manifest_payload: ManifestFactory
    ) -> None:
        """Remove never prompts."""
        inventory_server.reply("ImageRemove", {"manifests": [manifest_payload("1.0")]})

        with patch("tagwatch.cli.commands.image.typer.confirm") as mock_confirm:
            result = runner.invoke(app, ["image", "remove", "--image", "alpine"])

        assert result.exit_code == 0
        mock_confirm.assert_not_called()

    def test_unknown_image_propagates(self, inventory_server: Any) -> None:
        """The server's not-found error is shown unchanged, with one call."""
        inventory_server.reply(
            "ImageRemove", {"code": "not_found", "message": "image nope not found"}, 404
        )

        result = runner.invoke(app, ["image", "remove", "--image", "nope"])

        assert result.exit_code == 1
        assert "not_found: image nope not found" in result.output
        assert inventory_server.methods == ["ImageRemove"]


@pytest.mark.usefixtures("client_authorities")
class TestImagePrune:
    """Tests for `tagwatch image prune`."""

    @pytest.fixture
    def pruned(self, inventory_server: Any, manifest_payload: ManifestFactory) -> None:
        inventory_server.reply(
            "ImagePrune",
            {
                "images": [
                    {"name": "alpine", "manifests": [manifest_payload("3.18", size=2000)]},
                    {
                        "name": "nginx",
                        "manifests": [
                            manifest_payload("1.25", size=3000),
                            manifest_payload("1.24", size=500),
                        ],
                    },
                ]
            },
        )

    def test_declined_makes_no_call(self, inventory_server: Any) -> None:
        """Answering no aborts silently without contacting the server."""
        result = runner.invoke(app, ["image", "prune"], input="n\n")

        assert result.exit_code == 0
        assert PRUNE_ALL_WARNING in result.stdout
        assert inventory_server.requests == []

    def test_prompt_eof_makes_no_call(self, inventory_server: Any) -> None:
        """A failed prompt (no input) is treated as no."""
        result = runner.invoke(app, ["image", "prune"], input="")

        assert result.exit_code == 0
        assert inventory_server.requests == []

    @pytest.mark.usefixtures("pruned")
    def test_confirmed_prunes(self, inventory_server: Any) -> None:
        """Answering yes prunes and lists every removed manifest."""
        result = runner.invoke(app, ["image", "prune"], input="y\n")

        assert result.exit_code == 0
        assert inventory_server.methods == ["ImagePrune"]
        for tag in ("3.18", "1.25", "1.24"):
            assert tag in result.stdout
        assert "3 (5.5kB)" in result.stdout

    @pytest.mark.usefixtures("pruned")
    def test_force_skips_prompt(self, inventory_server: Any) -> None:
        """--force prunes without asking."""
        with patch("tagwatch.cli.commands.image.typer.confirm") as mock_confirm:
            result = runner.invoke(app, ["image", "prune", "--force"])

        assert result.exit_code == 0
        mock_confirm.assert_not_called()
        assert inventory_server.methods == ["ImagePrune"]

    def test_nothing_to_remove(self, inventory_server: Any) -> None:
        """An empty prune prints a message instead of a 0 (0B) table."""
        inventory_server.reply("ImagePrune", {"images": []})

        result = runner.invoke(app, ["image", "prune", "--force"])

        assert result.exit_code == 0
        assert "Nothing to be removed from the database" in result.stdout
        assert "0 (0B)" not in result.stdout
        assert "Total" not in result.stdout

    def test_remote_error_fails(self, inventory_server: Any) -> None:
        """A failing prune exits non-zero."""
        inventory_server.reply(
            "ImagePrune", {"code": "unavailable", "message": "try later"}, status_code=503
        )

        result = runner.invoke(app, ["image", "prune", "--force"])

        assert result.exit_code == 1
        assert "unavailable: try later" in result.output


class TestShouldProceed:
    """Tests for the prune confirmation decision."""

    @pytest.mark.parametrize(
        ("force", "confirmed", "expected"),
        [
            (True, None, True),
            (True, False, True),
            (False, True, True),
            (False, False, False),
            (False, None, False),
        ],
    )
    def test_decision(self, force: bool, confirmed: bool | None, expected: bool) -> None:
        """Only --force or an explicit yes lets the prune run."""
        assert should_proceed(force, confirmed) is expected
