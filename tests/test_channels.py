import asyncio
import unittest

from openalgo.data.channels import channel
from openalgo.errors import ChannelError


class ChannelTest(unittest.IsolatedAsyncioTestCase):
    async def test_items_arrive_in_fifo_order(self) -> None:
        tx, rx = channel(4)
        for item in ("a", "b", "c"):
            await tx.send(item)
        self.assertEqual(["a", "b", "c"], [await rx.recv() for _ in range(3)])

    async def test_closing_sender_drains_then_ends_iteration(self) -> None:
        tx, rx = channel(2)
        await tx.send(1)
        await tx.send(2)
        tx.close()

        self.assertEqual([1, 2], [item async for item in rx])
        self.assertIsNone(await rx.recv())

    async def test_closing_sender_wakes_blocked_receiver(self) -> None:
        tx, rx = channel(2)
        waiter = asyncio.create_task(rx.recv())
        await asyncio.sleep(0)
        tx.close()
        self.assertIsNone(await asyncio.wait_for(waiter, timeout=1))

    async def test_send_after_sender_close_raises(self) -> None:
        tx, _ = channel(2)
        tx.close()
        with self.assertRaises(ChannelError):
            await tx.send("late")

    async def test_send_after_receiver_close_raises(self) -> None:
        tx, rx = channel(2)
        rx.close()
        self.assertTrue(tx.closed)
        with self.assertRaises(ChannelError):
            await tx.send("late")

    async def test_full_channel_applies_backpressure(self) -> None:
        tx, rx = channel(1)
        await tx.send("first")
        blocked = asyncio.create_task(tx.send("second"))
        await asyncio.sleep(0.01)
        self.assertFalse(blocked.done())

        self.assertEqual("first", await rx.recv())
        await asyncio.wait_for(blocked, timeout=1)
        self.assertEqual("second", await rx.recv())

    async def test_receiver_close_releases_blocked_sender_with_error(self) -> None:
        tx, rx = channel(1)
        await tx.send("first")
        blocked = asyncio.create_task(tx.send("second"))
        await asyncio.sleep(0)
        rx.close()
        with self.assertRaises(ChannelError):
            await asyncio.wait_for(blocked, timeout=1)
        self.assertEqual(0, rx.qsize())

    async def test_send_nowait_on_full_channel_raises(self) -> None:
        tx, _ = channel(1)
        tx.send_nowait("only")
        with self.assertRaises(ChannelError):
            tx.send_nowait("overflow")

    def test_capacity_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            channel(0)


if __name__ == "__main__":
    unittest.main()
