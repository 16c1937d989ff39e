"""
Tests for section cue reconciliation and the session meter.
"""

import pytest

from chuk_live_sync.constants import DUMMY_TRACK_NAME
from chuk_live_sync.live import MemorySession, SessionAdapter
from chuk_live_sync.live.memory import MemoryCue
from chuk_live_sync.models import CueState, Section
from chuk_live_sync.sync import CueReconciler, MeterModel, TrackProvisioner


def make_reconciler(adapter: SessionAdapter) -> CueReconciler:
    return CueReconciler(adapter, MeterModel(adapter), TrackProvisioner(adapter))


@pytest.fixture
def sections() -> list[Section]:
    return [
        Section(name="Intro", start_bar=1, length_bars=4),
        Section(name="Verse", start_bar=5, length_bars=8),
    ]


class TestReconcile:
    """Tests for realizing sections as cues."""

    @pytest.mark.asyncio
    async def test_intro_verse_end(
        self, session: MemorySession, adapter: SessionAdapter, sections: list[Section]
    ) -> None:
        """Intro at 0, Verse at 16, End at 48 in 4/4."""
        placed = await make_reconciler(adapter).reconcile(sections)

        assert placed == [("Intro", 0.0), ("Verse", 16.0), ("End", 48.0)]
        assert session.cue_list() == [(0.0, "Intro"), (16.0, "Verse"), (48.0, "End")]

    @pytest.mark.asyncio
    async def test_placeholder_regions(
        self, session: MemorySession, adapter: SessionAdapter, sections: list[Section]
    ) -> None:
        """Each section gets an empty region on the placeholder track."""
        await make_reconciler(adapter).reconcile(sections)

        track = session.props["tracks"][0]
        assert track.props["name"] == DUMMY_TRACK_NAME
        regions = [
            (c.props["start_time"], c.props["length"], c.props["name"])
            for c in track.props["arrangement_clips"]
        ]
        assert regions == [(0.0, 16.0, "Intro"), (16.0, 32.0, "Verse")]

    @pytest.mark.asyncio
    async def test_rerun_does_not_duplicate(
        self, session: MemorySession, adapter: SessionAdapter, sections: list[Section]
    ) -> None:
        """Running twice never toggles existing cues away or adds new ones."""
        await make_reconciler(adapter).reconcile(sections)
        await make_reconciler(adapter).reconcile(sections)

        assert session.cue_list() == [(0.0, "Intro"), (16.0, "Verse"), (48.0, "End")]

    @pytest.mark.asyncio
    async def test_meter_read_from_session(
        self, session: MemorySession, adapter: SessionAdapter, sections: list[Section]
    ) -> None:
        """Positions follow the session's current meter."""
        session.props["signature_numerator"] = 3
        placed = await make_reconciler(adapter).reconcile(sections)
        assert placed == [("Intro", 0.0), ("Verse", 12.0), ("End", 36.0)]

    @pytest.mark.asyncio
    async def test_no_sections(self, session: MemorySession, adapter: SessionAdapter) -> None:
        """Without sections nothing is created."""
        assert await make_reconciler(adapter).reconcile([]) == []
        assert session.props["tracks"] == []
        assert session.cue_list() == []


class TestPlace:
    """Tests for placing and naming a single cue."""

    @pytest.mark.asyncio
    async def test_existing_cue_reused(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """A cue within tolerance is renamed, not toggled."""
        session.props["cue_points"].append(MemoryCue(8.0, "old"))
        state = await make_reconciler(adapter).place("Bridge", 8.0005)

        assert state is CueState.PRESENT
        assert session.cue_list() == [(8.0, "Bridge")]

    @pytest.mark.asyncio
    async def test_cue_outside_tolerance_is_separate(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """A cue just outside tolerance does not count."""
        session.props["cue_points"].append(MemoryCue(8.0, "old"))
        await make_reconciler(adapter).place("Bridge", 8.01)

        assert session.cue_list() == [(8.0, "old"), (8.01, "Bridge")]

    @pytest.mark.asyncio
    async def test_toggle_failure_is_warning(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """A failed toggle is reported and the run continues."""
        session.fail.add("set_or_delete_cue")
        state = await make_reconciler(adapter).place("Bridge", 8.0)

        assert state is CueState.ABSENT
        assert session.cue_list() == []

    @pytest.mark.asyncio
    async def test_unreadable_cue_skipped(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """Cues that cannot be read are skipped during the scan."""
        broken = MemoryCue(4.0, "broken")
        broken.fail.add("time")
        session.props["cue_points"].extend([broken, MemoryCue(4.0, "good")])

        reconciler = make_reconciler(adapter)
        assert await reconciler.name_cue(4.0, "Chorus") is True
        assert session.props["cue_points"][1].props["name"] == "Chorus"

    @pytest.mark.asyncio
    async def test_name_without_cue(self, adapter: SessionAdapter) -> None:
        """Naming where no cue exists reports False."""
        assert await make_reconciler(adapter).name_cue(4.0, "Chorus") is False


class TestMeterModel:
    """Tests for reading the meter from the session."""

    @pytest.mark.asyncio
    async def test_reads_current_signature(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """Every conversion sees the latest signature."""
        meter = MeterModel(adapter)
        assert await meter.bar_to_beats(2) == 8
        session.props["signature_numerator"] = 6
        session.props["signature_denominator"] = 8
        assert await meter.beats_per_bar() == 3

    @pytest.mark.asyncio
    async def test_unusable_signature_falls_back(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """Zero or non-numeric values fall back to 4."""
        session.props["signature_denominator"] = 0
        assert await MeterModel(adapter).beats_per_bar() == 4

    @pytest.mark.asyncio
    async def test_read_failure_falls_back(
        self, session: MemorySession, adapter: SessionAdapter
    ) -> None:
        """A failing read assumes 4/4."""
        session.fail.add("signature_numerator")
        assert await MeterModel(adapter).bar_to_beats(3) == 12
