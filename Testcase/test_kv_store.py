import pytest

import import_challenges
from anchor_errors import UpstreamFailure
from challenge_store import ChallengeDefinition, ChallengeStore
from kv_store import KVStore, get_kv_store
from kv_store_supabase import KVStoreSupabase
from platform_posts import PostDirectory


def test_counters_and_hashes():
    kv = KVStore()
    assert kv.get("missing") is None
    assert kv.incr_by("n") == 1
    assert kv.incr_by("n", 4) == 5
    assert kv.hincr_by("h", "alice", 20) == 20
    assert kv.hincr_by("h", "alice", 5) == 25
    kv.hset("h", "bob", 1)
    assert kv.hgetall("h") == {"alice": "25", "bob": "1"}
    assert kv.hlen("h") == 2
    assert kv.hget("h", "carol") is None


def test_file_store_survives_restart(tmp_path):
    path = tmp_path / "anchor_data.json"
    kv = KVStore(path)
    store = ChallengeStore(kv)
    store.save_challenge("t3_a", ChallengeDefinition("bed", ["bedroom", "seabed", "bedrock", "bedsheet"], "alice"))
    store.increment_attempts("t3_a", "bob")
    store.mark_solved("t3_a", "bob", 15)

    reopened = ChallengeStore(KVStore(path))
    assert reopened.load_challenge("t3_a").creator == "alice"
    state = reopened.load_user_state("t3_a", "bob")
    assert (state.attempts, state.solved, state.last_award) == (1, True, 15)
    assert reopened.user_score("bob") == 15
    assert reopened.solver_count("t3_a") == 1


def test_challenge_is_write_once(store):
    definition = ChallengeDefinition("bed", ["bedroom", "seabed", "bedrock", "bedsheet"], "alice")
    store.save_challenge("t3_a", definition)
    with pytest.raises(ValueError):
        store.save_challenge("t3_a", definition)


def test_answer_log_overwrites_same_attempt(store):
    store.append_answer_log("t3_a", "bob", 1, "sea", 1)
    store.append_answer_log("t3_a", "bob", 1, "sea", 1)
    store.append_answer_log("t3_a", "carol", 1, "bed", 2)
    assert [(e.username, e.text) for e in store.load_answer_log("t3_a")] == [("bob", "sea"), ("carol", "bed")]


def test_default_user_state(store):
    state = store.load_user_state("t3_a", "nobody")
    assert (state.attempts, state.solved, state.last_award) == (0, False, None)


def test_factory_backends():
    assert isinstance(get_kv_store("memory"), KVStore)
    with pytest.raises(ValueError):
        get_kv_store("redis")


class _FailingQuery:
    def execute(self):
        raise ConnectionError("network down")


class _FailingClient:
    def table(self, name):
        return self

    def select(self, *args, **kwargs):
        return self

    def eq(self, *args):
        return _FailingQuery()

    def rpc(self, name, params):
        return _FailingQuery()


def test_supabase_errors_become_upstream_failures():
    kv = KVStoreSupabase(client=_FailingClient())
    with pytest.raises(UpstreamFailure):
        kv.get("anchor:challenge:t3_a")
    with pytest.raises(UpstreamFailure) as exc:
        kv.incr_by("anchor:total_attempts:t3_a")
    assert exc.value.status_code == 503


def test_import_challenges_from_yaml(tmp_path, oracle):
    path = tmp_path / "challenges.yaml"
    path.write_text(
        "- anchor: bed\n"
        "  words: [bedroom, seabed, bedrock, bedsheet]\n"
        "  creator: alice\n"
        "- anchor: sun\n"
        "  words: [sunrise, sunset]\n"
    )
    challenges = import_challenges.load_challenges_file(str(path))
    assert challenges[0] == {"anchor": "bed", "words": ["bedroom", "seabed", "bedrock", "bedsheet"], "creator": "alice"}

    kv = KVStore()
    store = ChallengeStore(kv)
    created, failed = import_challenges.import_challenges(
        challenges, store, PostDirectory(kv), "bot", "anchorword", oracle=oracle)
    assert len(created) == 1
    assert store.load_challenge(created[0]["postId"]).creator == "alice"
    assert failed == [(1, "sun", "WordCountOutOfRange: Provide 4-6 words (got 2)")]


def test_import_rejects_non_yaml(tmp_path):
    path = tmp_path / "challenges.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        import_challenges.load_challenges_file(str(path))
