from unittest.mock import AsyncMock

import pytest

from matchstats.constants import CollectionNames
from matchstats.database.models import MatchResult
from matchstats.services.h2h import H2HService
from matchstats.utils.stats_exceptions import StoreUnavailableError
from helpers import make_match, make_record


@pytest.fixture
def h2h_service(store):
    return H2HService(store)


class TestComputeH2H:
    """Tests for head-to-head aggregation."""

    @pytest.mark.asyncio
    async def test_tallies_results_against_registered_opponent(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        matches = make_record(3, 1, 1, 'gem-b')

        written = await h2h_service.compute_h2h_for_user('user-a', matches)

        assert written == 1
        record = await h2h_service.get_h2h('user-a', 'user-b')
        assert (record.p1, record.p2) == ('user-a', 'user-b')
        assert (record.p1_wins, record.p2_wins, record.draws, record.total) == (3, 1, 1, 5)
        assert record.record_for('user-a') == (3, 1, 1)
        assert record.record_for('user-b') == (1, 3, 1)

    @pytest.mark.asyncio
    async def test_acting_user_in_second_slot(self, store, h2h_service):
        await store.register_external_id('gem-amy', 'amy')
        matches = make_record(4, 2, 0, 'gem-amy')

        await h2h_service.compute_h2h_for_user('zed', matches)

        record = await h2h_service.get_h2h('zed', 'amy')
        assert (record.p1, record.p2) == ('amy', 'zed')
        assert (record.p1_wins, record.p2_wins) == (2, 4)
        assert record.total == record.p1_wins + record.p2_wins + record.draws == 6

    @pytest.mark.asyncio
    async def test_lookup_is_order_independent(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        await h2h_service.compute_h2h_for_user('user-a', make_record(1, 0, 0, 'gem-b'))

        forward = await h2h_service.get_h2h('user-a', 'user-b')
        backward = await h2h_service.get_h2h('user-b', 'user-a')
        assert forward == backward
        assert forward.key == 'user-a_user-b'

    @pytest.mark.asyncio
    async def test_either_participant_produces_same_record(self, store, h2h_service):
        await store.register_external_id('gem-a', 'user-a')
        await store.register_external_id('gem-b', 'user-b')

        await h2h_service.compute_h2h_for_user('user-a', make_record(3, 1, 1, 'gem-b'))
        from_a = await h2h_service.get_h2h('user-a', 'user-b')

        await h2h_service.compute_h2h_for_user('user-b', make_record(1, 3, 1, 'gem-a'))
        from_b = await h2h_service.get_h2h('user-a', 'user-b')

        def counts(r):
            return r.p1, r.p2, r.p1_wins, r.p2_wins, r.draws, r.total

        assert counts(from_a) == counts(from_b)

    @pytest.mark.asyncio
    async def test_recompute_overwrites_instead_of_adding(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        matches = make_record(2, 1, 0, 'gem-b')

        await h2h_service.compute_h2h_for_user('user-a', matches)
        await h2h_service.compute_h2h_for_user('user-a', matches)

        record = await h2h_service.get_h2h('user-a', 'user-b')
        assert (record.p1_wins, record.p2_wins, record.total) == (2, 1, 3)

    @pytest.mark.asyncio
    async def test_stale_fields_are_dropped(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        await store.put(CollectionNames.H2H, 'user-a_user-b', {'p1': 'user-a', 'p2': 'user-b', 'legacy': True})

        await h2h_service.compute_h2h_for_user('user-a', make_record(1, 0, 0, 'gem-b'))

        document = await store.get(CollectionNames.H2H, 'user-a_user-b')
        assert 'legacy' not in document
        assert document['total'] == 1

    @pytest.mark.asyncio
    async def test_groups_each_opponent_separately(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        await store.register_external_id('gem-c', 'user-c')
        matches = make_record(2, 0, 0, 'gem-b') + make_record(0, 3, 0, 'gem-c')

        assert await h2h_service.compute_h2h_for_user('user-a', matches) == 2

        vs_b = await h2h_service.get_h2h('user-a', 'user-b')
        vs_c = await h2h_service.get_h2h('user-a', 'user-c')
        assert vs_b.record_for('user-a') == (2, 0, 0)
        assert vs_c.record_for('user-a') == (0, 3, 0)

    @pytest.mark.asyncio
    async def test_skips_matches_without_opponent_id(self, store, h2h_service):
        matches = [make_match(MatchResult.WIN), make_match(MatchResult.LOSS, opponent_gem_id='')]
        assert await h2h_service.compute_h2h_for_user('user-a', matches) == 0
        assert await store.list_documents(CollectionNames.H2H) == []

    @pytest.mark.asyncio
    async def test_skips_unregistered_opponents(self, store, h2h_service):
        assert await h2h_service.compute_h2h_for_user('user-a', make_record(2, 0, 0, 'gem-nobody')) == 0
        assert await store.list_documents(CollectionNames.H2H) == []

    @pytest.mark.asyncio
    async def test_skips_self_pairing(self, store, h2h_service):
        await store.register_external_id('gem-a', 'user-a')
        assert await h2h_service.compute_h2h_for_user('user-a', make_record(2, 0, 0, 'gem-a')) == 0
        assert await store.list_documents(CollectionNames.H2H) == []

    @pytest.mark.asyncio
    async def test_skips_groups_with_only_byes(self, store, h2h_service):
        await store.register_external_id('gem-b', 'user-b')
        matches = [make_match(MatchResult.BYE, opponent_gem_id='gem-b')]
        assert await h2h_service.compute_h2h_for_user('user-a', matches) == 0

    @pytest.mark.asyncio
    async def test_no_commit_when_nothing_staged(self, store, h2h_service, monkeypatch):
        write_many = AsyncMock()
        monkeypatch.setattr(store, '_write_many', write_many)

        await h2h_service.compute_h2h_for_user('user-a', [])
        await h2h_service.compute_h2h_for_user('user-a', make_record(1, 0, 0, 'gem-nobody'))

        write_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_batch_limit_caps_writes_per_run(self, store):
        service = H2HService(store, batch_limit=3)
        matches = []
        for i in range(5):
            await store.register_external_id(f'gem-{i}', f'user-{i}')
            matches += make_record(1, 0, 0, f'gem-{i}')

        assert await service.compute_h2h_for_user('acting', matches) == 3
        assert len(await store.list_documents(CollectionNames.H2H)) == 3

    @pytest.mark.asyncio
    async def test_failed_lookup_is_treated_as_unresolved(self, store, h2h_service, monkeypatch):
        await store.register_external_id('gem-b', 'user-b')
        await store.register_external_id('gem-c', 'user-c')
        real_resolve = store.resolve

        async def flaky_resolve(external_id):
            if external_id == 'gem-c':
                raise StoreUnavailableError('read gemIds/gem-c', 'connection reset')
            return await real_resolve(external_id)

        monkeypatch.setattr(store, 'resolve', flaky_resolve)
        matches = make_record(1, 0, 0, 'gem-b') + make_record(1, 0, 0, 'gem-c')

        assert await h2h_service.compute_h2h_for_user('user-a', matches) == 1
        assert await h2h_service.get_h2h('user-a', 'user-c') is None

    @pytest.mark.asyncio
    async def test_failed_commit_propagates(self, store, h2h_service, monkeypatch):
        await store.register_external_id('gem-b', 'user-b')
        monkeypatch.setattr(
            store, '_write_many',
            AsyncMock(side_effect=StoreUnavailableError('write of 1 documents', 'disk full'))
        )

        with pytest.raises(StoreUnavailableError):
            await h2h_service.compute_h2h_for_user('user-a', make_record(1, 0, 0, 'gem-b'))

    def test_rejects_non_positive_batch_limit(self):
        with pytest.raises(ValueError):
            H2HService(store=None, batch_limit=0)


class TestGetH2H:
    """Tests for head-to-head reads."""

    @pytest.mark.asyncio
    async def test_missing_pair(self, h2h_service):
        assert await h2h_service.get_h2h('user-a', 'user-b') is None

    @pytest.mark.asyncio
    async def test_store_failure_reads_as_missing(self, store, h2h_service, monkeypatch):
        monkeypatch.setattr(store, 'get', AsyncMock(side_effect=StoreUnavailableError('read', 'timeout')))
        assert await h2h_service.get_h2h('user-a', 'user-b') is None
