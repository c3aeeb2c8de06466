"""Tests for StoryEngine: word ingestion, completion and force-complete.

Covers the ingestion contract (ignore / reject / accept / complete), the
archive-and-restart transition, and ordering when several submissions for
one guild interleave at their await points.
"""

import asyncio

import pytest

from storychain import messages
from storychain.engine import IngestOutcome, is_terminator
from storychain.errors import EmptyStory, NoActiveStory
from storychain.notifications import CompletionNotice

from tests.conftest import CHANNEL, GUILD, OTHER_CHANNEL, FakeMessage


def ingest(engine, *msgs):
    async def _run():
        return [await engine.ingest(GUILD, m) for m in msgs]
    return asyncio.run(_run())


# ---------------------------------------------------------------------------
# Ignored messages
# ---------------------------------------------------------------------------

class TestIgnored:

    def test_guild_without_channel(self, engine, registry):
        msg = FakeMessage("hello")
        [result] = ingest(engine, msg)

        assert result.outcome is IngestOutcome.IGNORED
        assert registry.get(GUILD).current_story is None
        assert msg.reactions == [] and not msg.deleted

    def test_other_channel(self, engine, bound):
        msg = FakeMessage("hello world", channel_id=OTHER_CHANNEL)
        [result] = ingest(engine, msg)

        assert result.outcome is IngestOutcome.IGNORED
        assert bound.get(GUILD).current_story.words == []
        assert msg.replies == [] and not msg.deleted

    def test_inactive_story(self, engine, bound):
        bound.get(GUILD).current_story.is_active = False
        [result] = ingest(engine, FakeMessage("hello"))

        assert result.outcome is IngestOutcome.IGNORED
        assert bound.get(GUILD).current_story.words == []


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------

class TestRejections:

    @pytest.mark.parametrize("content", ["", "   ", "\n\t "])
    def test_empty_message_is_deleted_silently(self, engine, bound, content):
        msg = FakeMessage(content)
        [result] = ingest(engine, msg)

        assert result.outcome is IngestOutcome.REJECTED_EMPTY
        assert msg.deleted
        assert msg.replies == []
        assert bound.get(GUILD).current_story.words == []

    @pytest.mark.parametrize("content", ["hello world", "two  spaces", "tab\tseparated", "new\nline."])
    def test_multiple_words_are_rejected(self, engine, bound, content):
        msg = FakeMessage(content)
        [result] = ingest(engine, msg)

        assert result.outcome is IngestOutcome.REJECTED_MULTIPLE_WORDS
        assert msg.deleted
        assert msg.replies == [messages.SINGLE_WORD_ONLY]
        assert msg.reactions == []
        assert bound.get(GUILD).current_story.words == []
        assert bound.get(GUILD).completed_stories == []

    def test_failed_delete_is_swallowed(self, engine, bound):
        msg = FakeMessage("hello world", fail=True)
        [result] = ingest(engine, msg)

        assert result.outcome is IngestOutcome.REJECTED_MULTIPLE_WORDS
        assert bound.get(GUILD).current_story.words == []


# ---------------------------------------------------------------------------
# Acceptance
# ---------------------------------------------------------------------------

class TestAcceptance:

    def test_word_is_appended_and_acknowledged(self, engine, bound, clock):
        msg = FakeMessage("  Once  ", author_id=7)
        [result] = ingest(engine, msg)

        story = bound.get(GUILD).current_story
        assert result.outcome is IngestOutcome.ACCEPTED
        assert result.word == "Once"
        assert [w.word for w in story.words] == ["Once"]
        assert story.words[0].user_id == 7
        assert story.words[0].timestamp == clock.now
        assert msg.reactions == ["✅"]
        assert bound.get(GUILD).completed_stories == []

    @pytest.mark.parametrize("word", ["hello.world", "wait...what", "a?b", "x!y", "Once", "ok,"])
    def test_embedded_punctuation_does_not_terminate(self, engine, bound, word):
        [result] = ingest(engine, FakeMessage(word))

        assert result.outcome is IngestOutcome.ACCEPTED
        assert bound.get(GUILD).current_story.word_count == 1
        assert bound.get(GUILD).completed_stories == []

    def test_words_keep_submission_order(self, engine, bound):
        ingest(engine, *(FakeMessage(w) for w in ["one", "two", "three"]))

        assert bound.get(GUILD).current_story.text() == "one two three"

    def test_failed_reaction_keeps_the_word(self, engine, bound):
        [result] = ingest(engine, FakeMessage("hello", fail=True))

        assert result.outcome is IngestOutcome.ACCEPTED
        assert bound.get(GUILD).current_story.word_count == 1


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------

class TestCompletion:

    @pytest.mark.parametrize("word", ["end.", "wow!", "why?", "...", "?!"])
    def test_terminator_completes(self, engine, bound, word):
        ingest(engine, FakeMessage("start"))
        [result] = ingest(engine, FakeMessage(word))

        config = bound.get(GUILD)
        assert result.outcome is IngestOutcome.COMPLETED
        assert len(config.completed_stories) == 1
        assert config.current_story.words == []
        assert config.current_story.is_active
        assert config.current_story.channel_id == CHANNEL
        assert config.story_channel_id == CHANNEL

    def test_once_upon_a_time(self, engine, bound, directory):
        msgs = [
            FakeMessage("Once", author_id=1),
            FakeMessage("upon", author_id=2),
            FakeMessage("a", author_id=1),
            FakeMessage("time.", author_id=3),
        ]
        results = ingest(engine, *msgs)

        config = bound.get(GUILD)
        [archived] = config.completed_stories
        assert archived.content == "Once upon a time."
        assert archived.participants == {1, 2, 3}
        assert archived.word_count == 4
        assert archived.channel_id == CHANNEL
        assert results[-1].completed is archived
        assert config.current_story.words == []
        assert all(m.reactions == ["✅"] for m in msgs)

        sent = directory.channel(CHANNEL).sent
        assert sent == [
            CompletionNotice(
                content="Once upon a time.",
                participant_count=3,
                word_count=4,
                completed_at=archived.completed_at,
            ),
            messages.NEW_STORY_ANNOUNCEMENT,
        ]

    def test_lone_terminator_completes_immediately(self, engine, bound):
        [result] = ingest(engine, FakeMessage(".", author_id=9))

        [archived] = bound.get(GUILD).completed_stories
        assert result.outcome is IngestOutcome.COMPLETED
        assert archived.content == "."
        assert archived.participants == {9}

    def test_archive_keeps_completion_order(self, engine, bound):
        ingest(engine, FakeMessage("First."), FakeMessage("Second"), FakeMessage("one!"))

        contents = [s.content for s in bound.get(GUILD).completed_stories]
        assert contents == ["First.", "Second one!"]

    def test_failed_announcement_keeps_archive(self, engine, bound, directory):
        directory.channel(CHANNEL).fail = True
        [result] = ingest(engine, FakeMessage("Done."))

        assert result.outcome is IngestOutcome.COMPLETED
        assert len(bound.get(GUILD).completed_stories) == 1
        assert bound.get(GUILD).current_story.words == []

    def test_unreachable_channel_keeps_archive(self, engine, bound, directory):
        directory.missing.add(CHANNEL)
        ingest(engine, FakeMessage("Done."))

        assert len(bound.get(GUILD).completed_stories) == 1


# ---------------------------------------------------------------------------
# force_complete
# ---------------------------------------------------------------------------

class TestForceComplete:

    def test_archives_without_terminator(self, engine, bound, directory):
        ingest(engine, FakeMessage("no", author_id=1), FakeMessage("ending", author_id=2))

        archived = asyncio.run(engine.force_complete(GUILD))

        config = bound.get(GUILD)
        assert config.completed_stories == [archived]
        assert archived.content == "no ending"
        assert archived.participants == {1, 2}
        assert config.current_story.words == []
        assert config.current_story.channel_id == CHANNEL
        assert isinstance(directory.channel(CHANNEL).sent[0], CompletionNotice)

    def test_empty_story_raises(self, engine, bound):
        with pytest.raises(EmptyStory):
            asyncio.run(engine.force_complete(GUILD))
        assert bound.get(GUILD).completed_stories == []

    def test_no_story_raises(self, engine, registry):
        with pytest.raises(NoActiveStory):
            asyncio.run(engine.force_complete(GUILD))


# ---------------------------------------------------------------------------
# Interleaving
# ---------------------------------------------------------------------------

class TestInterleaving:

    def test_concurrent_submissions_keep_order(self, engine, bound):
        msgs = [FakeMessage(w, author_id=i, yield_on_react=True)
                for i, w in enumerate(["Once", "upon", "a", "time."])]

        async def _run():
            return await asyncio.gather(*(engine.ingest(GUILD, m) for m in msgs))

        results = asyncio.run(_run())

        [archived] = bound.get(GUILD).completed_stories
        assert archived.content == "Once upon a time."
        assert [r.outcome for r in results].count(IngestOutcome.COMPLETED) == 1

    def test_concurrent_terminators_each_complete_once(self, engine, bound):
        msgs = [FakeMessage(w, yield_on_react=True) for w in ["Hi.", "Bye!"]]

        async def _run():
            await asyncio.gather(*(engine.ingest(GUILD, m) for m in msgs))

        asyncio.run(_run())

        contents = [s.content for s in bound.get(GUILD).completed_stories]
        assert contents == ["Hi.", "Bye!"]
        assert bound.get(GUILD).current_story.words == []

    def test_ingest_waits_for_guard(self, engine, bound):
        async def _run():
            guard = bound.guard(GUILD)
            await guard.acquire()
            task = asyncio.create_task(engine.ingest(GUILD, FakeMessage("late")))
            await asyncio.sleep(0)
            words_while_held = bound.get(GUILD).current_story.word_count
            guard.release()
            await task
            return words_while_held

        assert asyncio.run(_run()) == 0
        assert bound.get(GUILD).current_story.word_count == 1


@pytest.mark.parametrize("word,expected", [
    ("end.", True), ("end!", True), ("end?", True), (".", True),
    ("end", False), ("e.nd", False), ("end,", False), ("end;", False),
])
def test_is_terminator(word, expected):
    assert is_terminator(word) is expected
