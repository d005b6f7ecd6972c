from factocord.bot.inline_command_log import InlineCommandLog


def test_record_and_get():
    log = InlineCommandLog()
    log.record(1, 2, 3)

    entry = log.get(1)
    assert (entry.channel_id, entry.response_id) == (2, 3)
    assert 1 in log
    assert log.get(4) is None


def test_record_overwrites_previous_response():
    log = InlineCommandLog()
    log.record(1, 2, 3)
    log.record(1, 2, 5)

    assert log.get(1).response_id == 5
    assert len(log) == 1


def test_prune_drops_only_expired_entries():
    log = InlineCommandLog(max_age_seconds=3600)
    log.record(1, 2, 3)
    created = log.get(1).created_at
    log.record(4, 5, 6)

    assert log.prune(now=created + 10) == 0
    assert log.prune(now=created + 3601) == 2
    assert len(log) == 0
