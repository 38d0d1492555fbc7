import asyncio
import threading
import unittest

from probe_client.jobs import JobControl, JobSimulator, JobState
from support import RecordingLoop


class JobControlTests(unittest.TestCase):
    def test_pause_and_resume(self):
        control = JobControl()
        self.assertIs(control.state, JobState.RUNNING)
        control.set_paused(True)
        self.assertTrue(control.is_paused())
        control.set_paused(False)
        self.assertFalse(control.is_paused())

    def test_stop_is_terminal_and_idempotent(self):
        control = JobControl()
        control.stop()
        control.stop()
        control.set_paused(True)
        control.set_paused(False)
        self.assertTrue(control.is_stopped())
        self.assertFalse(control.is_paused())

    def test_stop_from_another_thread(self):
        control = JobControl()
        thread = threading.Thread(target=control.stop)
        thread.start()
        thread.join()
        self.assertIs(control.state, JobState.STOPPED)


class JobSimulatorTests(unittest.TestCase):
    def setUp(self):
        self.loop = RecordingLoop()
        self.control = JobControl()
        self.lines = []
        self.jobs = JobSimulator(self.loop, self.control, interval=2.0, report=self.lines.append)

    def tearDown(self):
        self.loop.close()

    def test_start_schedules_first_tick(self):
        self.jobs.start()
        self.assertEqual(self.loop.timers, [(2.0, self.jobs.tick)])
        self.assertEqual(self.jobs.completed, 0)

    def test_tick_completes_job_and_reschedules(self):
        self.jobs.tick()
        self.jobs.tick()
        self.assertEqual(self.jobs.completed, 2)
        self.assertEqual(self.lines, ["Completed Job 1", "Completed Job 2"])
        self.assertEqual(len(self.loop.timers), 2)

    def test_paused_tick_keeps_timer_without_completing(self):
        self.control.set_paused(True)
        self.jobs.tick()
        self.jobs.tick()
        self.assertEqual(self.jobs.completed, 0)
        self.assertEqual(self.lines, [])
        self.assertEqual(len(self.loop.timers), 2)

    def test_resume_does_not_replay_missed_ticks(self):
        self.jobs.tick()
        self.control.set_paused(True)
        for _ in range(3):
            self.jobs.tick()
        self.control.set_paused(False)
        self.jobs.tick()
        self.assertEqual(self.jobs.completed, 2)
        self.assertEqual(self.lines, ["Completed Job 1", "Completed Job 2"])

    def test_stop_ends_ticking(self):
        self.jobs.tick()
        self.control.stop()
        self.jobs.tick()
        scheduled = len(self.loop.timers)

        self.jobs.tick()
        self.assertEqual(self.jobs.completed, 1)
        self.assertEqual(len(self.loop.timers), scheduled)
        self.assertEqual(scheduled, 1)
        self.assertEqual(self.lines[-1], "Stopping")
        self.assertTrue(self.jobs.stopped.done())
        self.assertEqual(self.jobs.stopped.result(), 1)


class JobSimulatorReactorTests(unittest.TestCase):
    def test_ticks_on_running_loop_until_stopped(self):
        loop = asyncio.new_event_loop()
        control = JobControl()
        lines = []

        def report(line):
            lines.append(line)
            if line == "Completed Job 3":
                control.stop()

        jobs = JobSimulator(loop, control, interval=0.01, report=report)
        try:
            jobs.start()
            completed = loop.run_until_complete(asyncio.wait_for(jobs.stopped, timeout=5))
        finally:
            loop.close()

        self.assertEqual(completed, 3)
        self.assertEqual(lines, ["Completed Job 1", "Completed Job 2", "Completed Job 3", "Stopping"])


if __name__ == "__main__":
    unittest.main()
