"""Tests for writing fragments into component READMEs."""

from __future__ import annotations

import asyncio
from pathlib import Path

from tsdocgen.extractor import FragmentBuffer
from tsdocgen.patcher import Patcher

from tests._fixtures.packages_builder import END, START, PackagesBuilder


def _buffer(**fragments: list[str]) -> FragmentBuffer:
    buffer = FragmentBuffer()
    for key, values in fragments.items():
        for value in values:
            buffer.append(key.replace("_", "-"), value)
    return buffer


def test_destination_is_component_readme(tmp_path: Path) -> None:
    patcher = Patcher(tmp_path / "packages")

    assert patcher.destination("mdc-drawer") == tmp_path / "packages" / "mdc-drawer" / "README.md"


def test_render_joins_fragments_with_newline() -> None:
    buffer = _buffer(mdc_drawer=["one\n", "two\n"])

    assert Patcher.render(buffer.get("mdc-drawer")) == "one\n\ntwo\n"


def test_flush_writes_joined_fragments(packages: PackagesBuilder) -> None:
    readme = packages.marked_readme("mdc-drawer")
    buffer = _buffer(mdc_drawer=["### MDCDrawer\n", "### MDCDismissibleDrawerFoundation\n"])

    outcomes = Patcher(packages.root / "packages").flush_sync(buffer)

    assert [outcome.key for outcome in outcomes] == ["mdc-drawer"]
    assert outcomes[0].ok
    assert outcomes[0].changed
    assert readme.read_text(encoding="utf-8") == (
        f"{START}\n### MDCDrawer\n\n### MDCDismissibleDrawerFoundation\n\n{END}\n"
    )


def test_flush_twice_is_byte_identical(packages: PackagesBuilder) -> None:
    readme = packages.marked_readme("mdc-drawer")
    buffer = _buffer(mdc_drawer=["### MDCDrawer\n"])
    patcher = Patcher(packages.root / "packages")

    patcher.flush_sync(buffer)
    first = readme.read_bytes()
    outcomes = patcher.flush_sync(buffer)

    assert readme.read_bytes() == first
    assert outcomes[0].changed is False


def test_flush_only_writes_filtered_components(packages: PackagesBuilder) -> None:
    drawer = packages.marked_readme("mdc-drawer")
    listing = packages.marked_readme("mdc-list")
    buffer = _buffer(mdc_drawer=["drawer"], mdc_list=["list"])

    outcomes = Patcher(packages.root / "packages").flush_sync(buffer)

    assert [outcome.key for outcome in outcomes] == ["mdc-drawer"]
    assert "drawer" in drawer.read_text(encoding="utf-8")
    assert listing.read_text(encoding="utf-8") == f"{START}\nstale\n{END}\n"


def test_empty_filter_selects_every_component(packages: PackagesBuilder) -> None:
    packages.marked_readme("mdc-drawer")
    listing = packages.marked_readme("mdc-list")
    buffer = _buffer(mdc_drawer=["drawer"], mdc_list=["list"])

    outcomes = Patcher(packages.root / "packages", component_filter="").flush_sync(buffer)

    assert sorted(outcome.key for outcome in outcomes) == ["mdc-drawer", "mdc-list"]
    assert listing.read_text(encoding="utf-8") == f"{START}\nlist\n{END}\n"


def test_read_failure_is_isolated_per_component(packages: PackagesBuilder, caplog) -> None:
    present = packages.marked_readme("mdc-drawer-modal")
    buffer = _buffer(mdc_drawer=["missing"], mdc_drawer_modal=["modal"])

    with caplog.at_level("ERROR", logger="tsdocgen"):
        outcomes = Patcher(packages.root / "packages").flush_sync(buffer)

    by_key = {outcome.key: outcome for outcome in outcomes}
    assert by_key["mdc-drawer"].ok is False
    assert "read failed" in (by_key["mdc-drawer"].error or "")
    assert by_key["mdc-drawer-modal"].ok
    assert present.read_text(encoding="utf-8") == f"{START}\nmodal\n{END}\n"
    assert any("Failed to read" in record.getMessage() for record in caplog.records)


def test_write_failure_is_logged_and_recorded(packages: PackagesBuilder, monkeypatch, caplog) -> None:
    readme = packages.marked_readme("mdc-drawer")
    original_write = Path.write_text

    def failing_write(self: Path, *args, **kwargs):
        if self == readme:
            raise PermissionError("read-only")
        return original_write(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", failing_write)

    with caplog.at_level("ERROR", logger="tsdocgen"):
        outcomes = Patcher(packages.root / "packages").flush_sync(_buffer(mdc_drawer=["new"]))

    assert outcomes[0].ok is False
    assert "write failed" in (outcomes[0].error or "")
    assert any("Failed to write" in record.getMessage() for record in caplog.records)


def test_misplaced_markers_leave_file_unchanged(packages: PackagesBuilder) -> None:
    content = f"# Drawer\n\n{START}\nstale\n{END}\n"
    readme = packages.readme("mdc-drawer", content)

    outcomes = Patcher(packages.root / "packages").flush_sync(_buffer(mdc_drawer=["new"]))

    assert outcomes[0].ok
    assert outcomes[0].changed is False
    assert readme.read_text(encoding="utf-8") == content


def test_dry_run_reports_diff_without_writing(packages: PackagesBuilder) -> None:
    readme = packages.marked_readme("mdc-drawer")

    outcomes = Patcher(packages.root / "packages", dry_run=True).flush_sync(
        _buffer(mdc_drawer=["fresh"])
    )

    assert outcomes[0].dry_run
    assert outcomes[0].changed
    assert "-stale" in outcomes[0].diff
    assert "+fresh" in outcomes[0].diff
    assert readme.read_text(encoding="utf-8") == f"{START}\nstale\n{END}\n"


def test_flush_can_be_awaited(packages: PackagesBuilder) -> None:
    readme = packages.marked_readme("mdc-drawer")
    patcher = Patcher(packages.root / "packages")

    outcomes = asyncio.run(patcher.flush(_buffer(mdc_drawer=["awaited"])))

    assert outcomes[0].ok
    assert readme.read_text(encoding="utf-8") == f"{START}\nawaited\n{END}\n"


def test_undecodable_readme_is_isolated_per_component(packages: PackagesBuilder, caplog) -> None:
    broken = packages.root / "packages" / "mdc-drawer" / "README.md"
    broken.parent.mkdir(parents=True)
    broken.write_bytes(f"{START}\n".encode("utf-8") + b"\xff\xfe\n" + f"{END}\n".encode("utf-8"))
    modal = packages.marked_readme("mdc-drawer-modal")
    buffer = _buffer(mdc_drawer=["drawer"], mdc_drawer_modal=["modal"])

    with caplog.at_level("ERROR", logger="tsdocgen"):
        outcomes = Patcher(packages.root / "packages").flush_sync(buffer)

    by_key = {outcome.key: outcome for outcome in outcomes}
    assert by_key["mdc-drawer"].ok is False
    assert "read failed" in (by_key["mdc-drawer"].error or "")
    assert by_key["mdc-drawer-modal"].ok
    assert modal.read_text(encoding="utf-8") == f"{START}\nmodal\n{END}\n"
    assert broken.read_bytes().endswith(b"\xff\xfe\n" + f"{END}\n".encode("utf-8"))
