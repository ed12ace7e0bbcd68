#!/usr/bin/python3
# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-

"""Tests for NamePicker - the picker facade."""

import asyncio
import random
import unittest

from whosnext.picker.config import PickerConfig
from whosnext.picker.models import DrawPhase
from whosnext.picker.picker import NamePicker
from whosnext.picker.sinks import AudioSink, CelebrationBurst, CelebrationSink
from whosnext.picker.sources import SourceLoader, StaticSourceLoader
from whosnext.picker.timers import ManualClock

FIFTEEN = [f'Person {i:02d}' for i in range(1, 16)]

SOURCES = {
    'home': 'A\nB\nC\n',
    'work': '\n'.join(FIFTEEN) + '\n',
    '15': '\n'.join(FIFTEEN),
}


class CountingAudio(AudioSink):
    def __init__(self):
        self.ticks = 0
        self.wins = 0

    def play_tick(self):
        self.ticks += 1

    def play_win(self):
        self.wins += 1


class CollectingCelebration(CelebrationSink):
    def __init__(self):
        self.calls = []

    def celebrate(self, winner, burst):
        self.calls.append((winner, burst))


class BrokenAudio(AudioSink):
    def play_tick(self):
        raise OSError('no audio device')

    def play_win(self):
        raise OSError('no audio device')


class FailingLoader(SourceLoader):
    def __init__(self):
        self.calls = []

    async def load(self, name):
        self.calls.append(name)
        raise OSError('network unreachable')


class PickerTestCase(unittest.IsolatedAsyncioTestCase):
    """Common setup: picker on a virtual clock with in-memory sources."""

    def setUp(self):
        self.clock = ManualClock()
        self.audio = CountingAudio()
        self.celebration = CollectingCelebration()
        self.winners = []
        self.picker = NamePicker(
            loader=StaticSourceLoader(SOURCES),
            clock=self.clock,
            rng=random.Random(7),
            audio=self.audio,
            celebration=self.celebration,
        )
        self.picker.add_listener(self.winners.append)

    def tearDown(self):
        self.picker.close()

    def draw(self):
        """Pick and run the spin to completion."""
        started = self.picker.pick()
        if started:
            self.clock.advance(self.picker.state.duration)
        return started


class TestPickerCreation(unittest.TestCase):
    """Tests for NamePicker instantiation."""

    def test_defaults(self):
        """A new picker is idle with an empty pool and a 7 second spin."""
        with NamePicker() as picker:
            self.assertEqual(picker.pool, ())
            self.assertEqual(picker.history, ())
            self.assertEqual(picker.spin_duration, 7)
            self.assertTrue(picker.state.is_idle)
            self.assertIsNone(picker.active_source)
            self.assertFalse(picker.can_pick)

    def test_invalid_config_raises(self):
        """An invalid config is refused at construction."""
        with self.assertRaises(ValueError):
            NamePicker(config=PickerConfig(spin_duration=10))

    def test_custom_pool_cap(self):
        """max_pool_size from the config caps the pool."""
        with NamePicker(config=PickerConfig(max_pool_size=2)) as picker:
            self.assertTrue(picker.add_entry('A'))
            self.assertTrue(picker.add_entry('B'))
            self.assertFalse(picker.add_entry('C'))


class TestLoadFrom(PickerTestCase):
    """Tests for loading named sources."""

    async def test_start_loads_initial_source(self):
        """start() loads the configured initial source ('work')."""
        count = await self.picker.start()

        self.assertEqual(count, 15)
        self.assertEqual(self.picker.active_source, 'work')

    async def test_fifteen_entry_source(self):
        """After loading 15 named entries, history is empty and 15 are eligible."""
        await self.picker.load_from('15')

        self.assertEqual(self.picker.pool, tuple(FIFTEEN))
        self.assertEqual(self.picker.history, ())
        self.assertEqual(len(self.picker.eligible()), 15)

    async def test_load_resets_history_and_state(self):
        """load_from always yields empty history and an idle state."""
        await self.picker.load_from('home')
        self.picker.set_spin_duration(3)
        self.draw()
        self.draw()
        self.assertEqual(len(self.picker.history), 2)

        await self.picker.load_from('home')

        self.assertEqual(self.picker.history, ())
        self.assertTrue(self.picker.state.is_idle)
        self.assertEqual(len(self.picker.eligible()), 3)

    async def test_load_during_spin_waits_for_settle(self):
        """A reload during a spin lets the spin finish, then resets."""
        await self.picker.load_from('home')
        self.picker.pick()

        task = asyncio.ensure_future(self.picker.load_from('15'))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.assertFalse(task.done())
        self.assertTrue(self.picker.is_spinning)

        self.clock.advance(7)
        count = await asyncio.wait_for(task, timeout=1)

        self.assertEqual(count, 15)
        self.assertEqual(len(self.winners), 1)
        self.assertIn(self.winners[0], ['A', 'B', 'C'])
        self.assertEqual(self.picker.history, ())
        self.assertTrue(self.picker.state.is_idle)

    async def test_custom_source_starts_empty(self):
        """'custom' clears the pool without asking the loader."""
        loader = FailingLoader()
        picker = NamePicker(loader=loader, clock=self.clock)
        picker.add_entry('Leftover')

        count = await picker.load_from('custom')

        self.assertEqual(count, 0)
        self.assertEqual(picker.pool, ())
        self.assertEqual(picker.active_source, 'custom')
        self.assertEqual(loader.calls, [])

    async def test_loader_failure_gives_empty_pool(self):
        """A failing loader is logged and leaves an empty pool."""
        await self.picker.load_from('home')
        self.picker.loader = FailingLoader()

        with self.assertLogs('whosnext.picker.picker', level='WARNING'):
            count = await self.picker.load_from('work')

        self.assertEqual(count, 0)
        self.assertEqual(self.picker.pool, ())
        self.assertEqual(self.picker.history, ())
        self.assertEqual(self.picker.active_source, 'work')

    async def test_unknown_source_gives_empty_pool(self):
        """An unknown source name degrades to an empty pool."""
        count = await self.picker.load_from('nope')
        self.assertEqual(count, 0)

    async def test_no_loader_gives_empty_pool(self):
        """Without a loader every named source is empty."""
        picker = NamePicker(clock=self.clock)
        self.assertEqual(await picker.load_from('home'), 0)


class TestPick(PickerTestCase):
    """Tests for drawing winners."""

    async def asyncSetUp(self):
        await self.picker.load_from('home')
        self.picker.set_spin_duration(3)

    async def test_three_entry_scenario(self):
        """Pool [A, B, C] with a 3 second spin yields one winner, two left."""
        self.assertTrue(self.picker.pick())
        self.assertTrue(self.picker.is_spinning)

        self.clock.advance(3)

        self.assertEqual(len(self.winners), 1)
        winner = self.winners[0]
        self.assertIn(winner, ['A', 'B', 'C'])
        self.assertEqual(self.picker.history, (winner,))
        self.assertEqual(
            self.picker.eligible(),
            [name for name in ['A', 'B', 'C'] if name != winner],
        )

    async def test_pick_returns_before_winner(self):
        """pick() only schedules; nothing is committed until the spin ends."""
        self.picker.pick()
        self.assertEqual(self.picker.history, ())
        self.assertEqual(self.winners, [])

    async def test_no_repeats_and_exhaustion(self):
        """|pool| draws give each entry once; a further pick is a no-op."""
        for _ in range(3):
            self.assertTrue(self.draw())

        self.assertEqual(sorted(self.picker.history), ['A', 'B', 'C'])
        self.assertEqual(self.picker.eligible(), [])
        self.assertFalse(self.picker.can_pick)
        self.assertFalse(self.picker.pick())
        self.assertTrue(self.picker.state.is_idle)

    async def test_pick_while_spinning_is_rejected(self):
        """A second pick during a spin does nothing."""
        self.picker.pick()
        self.assertFalse(self.picker.pick())
        self.clock.advance(3)
        self.assertEqual(len(self.picker.history), 1)

    async def test_no_call_shortens_a_spin(self):
        """Edits and requests during a spin cannot cut it short."""
        self.picker.set_spin_duration(7)
        self.picker.pick()

        self.picker.pick()
        self.picker.add_entry('D')
        self.picker.remove_entry('A')
        self.picker.set_spin_duration(3)
        self.clock.advance(6.9)

        self.assertTrue(self.picker.is_spinning)
        self.assertEqual(self.picker.state.duration, 7)
        self.assertEqual(self.winners, [])

        self.clock.advance(0.2)
        self.assertEqual(len(self.winners), 1)

    async def test_pool_edits_affect_next_draw(self):
        """Eligibility is recomputed at each pick."""
        self.picker.remove_entry('A')
        self.picker.remove_entry('B')
        self.draw()
        self.assertEqual(self.picker.history, ('C',))

        self.picker.add_entry('D')
        self.draw()
        self.assertEqual(self.picker.history, ('C', 'D'))

    async def test_removing_drawn_entry_keeps_history(self):
        """History is a record; removing a winner from the pool keeps it."""
        self.draw()
        winner = self.picker.history[0]

        self.assertTrue(self.picker.remove_entry(winner))

        self.assertEqual(self.picker.history, (winner,))
        self.assertNotIn(winner, self.picker.pool)

    async def test_duplicate_labels_excluded_together(self):
        """Equal labels are separate rows but one draw excludes them all."""
        await self.picker.load_from('custom')
        for name in ['A', 'A']:
            self.picker.add_entry(name)

        self.draw()

        self.assertEqual(self.picker.history, ('A',))
        self.assertFalse(self.picker.pick())

    async def test_countdown_exposed(self):
        """remaining_seconds counts down during the spin."""
        self.picker.pick()
        self.assertEqual(self.picker.remaining_seconds, 3)
        self.clock.advance(1)
        self.assertEqual(self.picker.remaining_seconds, 2)

    async def test_statistics_survive_reload(self):
        """Draw statistics keep counting across list reloads."""
        self.draw()
        await self.picker.load_from('home')
        self.draw()

        self.assertEqual(self.picker.statistics.total_draws, 2)


class TestSpinDuration(PickerTestCase):
    """Tests for the configurable spin length."""

    def test_valid_durations(self):
        """Any whole number of seconds in [3, 7] is accepted."""
        for seconds in range(3, 8):
            self.picker.set_spin_duration(seconds)
            self.assertEqual(self.picker.spin_duration, seconds)

    def test_invalid_durations_raise(self):
        """Out-of-range or non-integer durations are refused."""
        for seconds in [2, 8, 3.5, True, '5']:
            with self.assertRaises(ValueError):
                self.picker.set_spin_duration(seconds)
        self.assertEqual(self.picker.spin_duration, 7)

    async def test_default_spin_is_seven_seconds(self):
        """Without configuration a spin lasts seven seconds."""
        await self.picker.load_from('home')
        self.picker.pick()
        self.clock.advance(6.95)
        self.assertTrue(self.picker.is_spinning)
        self.clock.advance(0.1)
        self.assertTrue(self.picker.state.is_idle)


class TestSinks(PickerTestCase):
    """Tests for the audio and celebration collaborators."""

    async def asyncSetUp(self):
        await self.picker.load_from('home')
        self.picker.set_spin_duration(3)

    async def test_tick_and_win_sounds(self):
        """Each tick plays a sound; the settle plays one win sound."""
        self.draw()
        self.assertGreaterEqual(self.audio.ticks, 29)
        self.assertEqual(self.audio.wins, 1)

    async def test_celebration_on_settle(self):
        """The celebration runs once with the default burst."""
        self.draw()

        self.assertEqual(len(self.celebration.calls), 1)
        winner, burst = self.celebration.calls[0]
        self.assertEqual(winner, self.picker.history[0])
        self.assertEqual(burst, CelebrationBurst(particle_count=100, spread=70, origin_y=0.6))

    async def test_failing_sinks_do_not_block(self):
        """Sink errors are logged; the draw completes normally."""
        picker = NamePicker(
            loader=StaticSourceLoader(SOURCES),
            clock=self.clock,
            audio=BrokenAudio(),
        )
        await picker.load_from('home')
        picker.set_spin_duration(3)
        picker.pick()

        with self.assertLogs('whosnext.picker.sinks', level='ERROR'):
            self.clock.advance(3)

        self.assertEqual(len(picker.history), 1)
        self.assertTrue(picker.state.is_idle)

    async def test_failing_listener_does_not_block_others(self):
        """A raising listener does not stop later listeners."""
        def broken(winner):
            raise ValueError('bad listener')

        later = []
        self.picker.add_listener(broken)
        self.picker.add_listener(later.append)

        self.draw()

        self.assertEqual(len(later), 1)

    async def test_remove_listener(self):
        """Removed listeners are not called; removing twice is harmless."""
        self.picker.remove_listener(self.winners.append)
        self.picker.remove_listener(self.winners.append)
        self.draw()
        self.assertEqual(self.winners, [])


class TestSnapshot(PickerTestCase):
    """Tests for the display projection."""

    async def test_snapshot_rows(self):
        """Drawn rows carry their ordinal badge and cannot be removed."""
        await self.picker.load_from('home')
        self.picker.set_spin_duration(3)
        self.draw()
        winner = self.picker.history[0]

        snap = self.picker.snapshot()

        self.assertEqual(snap.pool, ('A', 'B', 'C'))
        self.assertEqual(snap.history, (winner,))
        self.assertEqual(snap.spin_duration, 3)
        self.assertEqual(snap.active_source, 'home')
        self.assertTrue(snap.can_pick)
        self.assertFalse(snap.is_full)
        for row in snap.rows:
            if row.label == winner:
                self.assertTrue(row.selected)
                self.assertEqual(row.ordinal_label, '1st')
                self.assertFalse(row.removable)
            else:
                self.assertFalse(row.selected)
                self.assertIsNone(row.ordinal_label)
                self.assertTrue(row.removable)

    async def test_snapshot_during_spin(self):
        """While spinning the snapshot shows the countdown and no pick."""
        await self.picker.load_from('home')
        self.picker.pick()
        self.clock.advance(2)

        snap = self.picker.snapshot()

        self.assertEqual(snap.state.phase, DrawPhase.SPINNING)
        self.assertEqual(snap.remaining_seconds, 5)
        self.assertFalse(snap.can_pick)


class TestIsolationAndTeardown(PickerTestCase):
    """Tests for independent instances and close()."""

    async def test_instances_do_not_interfere(self):
        """Two pickers on one clock keep separate pools and histories."""
        other = NamePicker(loader=StaticSourceLoader(SOURCES), clock=self.clock)
        await self.picker.load_from('home')
        await other.load_from('15')

        self.picker.set_spin_duration(3)
        self.picker.pick()
        self.assertTrue(other.pick())
        self.clock.advance(7)

        self.assertIn(self.picker.history[0], ['A', 'B', 'C'])
        self.assertIn(other.history[0], FIFTEEN)
        self.assertEqual(len(self.picker.history), 1)
        self.assertEqual(len(other.history), 1)
        other.close()

    async def test_close_mid_spin(self):
        """Closing stops the spin without a winner and refuses later picks."""
        await self.picker.load_from('home')
        self.picker.pick()
        self.clock.advance(1)

        self.picker.close()
        self.clock.advance(10)

        self.assertEqual(self.winners, [])
        self.assertEqual(self.clock.pending(), 0)
        self.assertFalse(self.picker.pick())
        self.assertFalse(self.picker.can_pick)


if __name__ == '__main__':
    unittest.main()
