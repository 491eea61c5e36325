import asyncio

from idp.services.autosave import DebouncedSaver


def test_rapid_edits_collapse_into_one_save():
    calls = []

    async def scenario():
        saver = DebouncedSaver(0.05)

        def save_value(value):
            async def _save(seq):
                calls.append((value, seq))
            return _save

        saver.schedule("k", save_value("a"))
        saver.schedule("k", save_value("ab"))
        last = saver.schedule("k", save_value("abc"))
        await last
        assert not saver.is_pending("k")

    asyncio.run(scenario())
    assert [v for v, _ in calls] == ["abc"]


def test_keys_are_debounced_independently():
    calls = []

    async def scenario():
        saver = DebouncedSaver(0.02)

        async def save_a(seq):
            calls.append("a")

        async def save_b(seq):
            calls.append("b")

        t1 = saver.schedule(("response", 1, 101), save_a)
        t2 = saver.schedule(("response", 1, 102), save_b)
        await asyncio.gather(t1, t2)

    asyncio.run(scenario())
    assert sorted(calls) == ["a", "b"]


def test_flush_runs_pending_save_immediately():
    calls = []

    async def scenario():
        saver = DebouncedSaver(60)

        async def save(seq):
            calls.append(seq)
            return "saved"

        saver.schedule("k", save)
        assert saver.is_pending("k")
        assert await saver.flush("k") == "saved"
        assert await saver.flush("k") is None

    asyncio.run(scenario())
    assert len(calls) == 1


def test_cancel_all_drops_pending_saves():
    calls = []

    async def scenario():
        saver = DebouncedSaver(0.01)

        async def save(seq):
            calls.append(seq)

        saver.schedule("k", save)
        saver.cancel_all()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert calls == []


def test_sequence_numbers_strictly_increase():
    saver = DebouncedSaver(0)
    seqs = [saver.next_seq() for _ in range(100)]
    assert seqs == sorted(set(seqs))


def test_has_pending_tracks_all_keys():
    async def scenario():
        saver = DebouncedSaver(60)

        async def save(seq):
            return seq

        assert not saver.has_pending()
        saver.schedule("a", save)
        saver.schedule("b", save)
        await saver.flush("a")
        assert saver.has_pending()
        await saver.flush("b")
        assert not saver.has_pending()

    asyncio.run(scenario())
