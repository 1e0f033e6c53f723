"""Tests for storyfacts.world - entities, world loading, actions and clauses."""

import numpy as np
import pytest

from storyfacts.knowledge.store import Knowledge
from storyfacts.world import actions
from storyfacts.world.actions import InvalidAction
from storyfacts.world.clause import Clause, Question
from storyfacts.world.entity import Entity
from storyfacts.world.world import World


@pytest.fixture
def world():
    return World.basic()


class TestEntity:
    def test_flags_default_false(self):
        entity = Entity("John", {"is_actor": True})
        assert entity.is_actor is True
        assert entity.is_location is False

    def test_identity_semantics(self):
        a, b = Entity("John"), Entity("John")
        assert a != b
        assert len({a, b}) == 2

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            Entity("John").colour


class TestWorld:
    def test_basic_world_contents(self, world):
        assert {e.name for e in world.get_locations()} == {
            "bathroom", "bedroom", "garden", "hallway", "kitchen", "office",
        }
        assert {e.name for e in world.get_objects()} == {"apple", "football", "milk"}
        assert "John" in {e.name for e in world.get_actors()}
        assert world.god() not in world.get_actors()

    def test_initial_placement(self, world):
        assert world.location_of(world.get("John")) is world.get("bathroom")
        assert world.location_of(world.get("apple")) is world.get("kitchen")

    def test_location_follows_carrier(self, world):
        sandra, apple = world.get("Sandra"), world.get("apple")
        world.perform_action("get", sandra, apple)
        assert world.get_state(apple, "is_in") is sandra
        assert world.location_of(apple) is world.get("kitchen")

    def test_duplicate_entity(self, world):
        with pytest.raises(ValueError):
            world.create_entity("John")

    def test_unknown_entity(self, world):
        with pytest.raises(KeyError):
            world.get("Nobody")

    def test_invalid_action_raises(self, world):
        john, apple = world.get("John"), world.get("apple")
        with pytest.raises(InvalidAction):
            world.perform_action("get", john, apple)

    def test_unknown_action_raises(self, world):
        with pytest.raises(InvalidAction):
            world.perform_action("fly", world.get("John"))

    def test_load_file(self, tmp_path):
        path = tmp_path / "tiny.txt"
        path.write_text("# tiny\ncreate den is_location\ncreate Ann is_actor\nset Ann is_in den\n")
        world = World()
        world.load(path)
        assert world.location_of(world.get("Ann")) is world.get("den")

    def test_load_rejects_garbage(self):
        with pytest.raises(ValueError, match="line.txt:2"):
            World().load_lines(["create den is_location", "explode den"], "line.txt")

    def test_set_dir_places_both_ways(self):
        world = World()
        a = world.create_entity("a", {"is_location": True})
        b = world.create_entity("b", {"is_location": True})
        world.perform_action("set_dir", world.god(), a, "n", b)
        assert world.get_state(a, "n") is b
        assert world.get_state(b, "s") is a


class TestActions:
    def test_teleport_validity(self, world):
        john = world.get("John")
        assert actions.teleport.is_valid(world, john, world.get("kitchen"))
        assert not actions.teleport.is_valid(world, john, world.get("bathroom"))
        assert not actions.teleport.is_valid(world, john, world.get("apple"))

    def test_give_requires_holding_and_company(self, world):
        sandra, jeff, mary, apple = (world.get(n) for n in ("Sandra", "Jeff", "Mary", "apple"))
        assert not actions.give.is_valid(world, sandra, apple, jeff)
        world.perform_action("get", sandra, apple)
        assert actions.give.is_valid(world, sandra, apple, jeff)
        assert not actions.give.is_valid(world, sandra, apple, mary)
        assert not actions.give.is_valid(world, sandra, apple, sandra)

    def test_drop_uses_known_actor_location(self, world):
        sandra, apple, kitchen = world.get("Sandra"), world.get("apple"), world.get("kitchen")
        knowledge = Knowledge(world, exclusive=("is_in",))
        clauses = [
            Clause(world, True, sandra, actions.teleport, world.get("garden")),
            Clause(world, True, sandra, actions.teleport, kitchen),
            Clause(world, True, sandra, actions.get, apple),
            Clause(world, True, sandra, actions.drop, apple),
        ]
        for clause in clauses:
            assert clause.is_valid(), clause
            clause.perform()
            knowledge.update(clause)

        value, support = knowledge.current().ledger(apple).get_value("is_in", return_support=True)
        assert value is kitchen
        assert support == {clauses[1], clauses[3]}
        assert world.get_state(apple, "is_in") is kitchen

    def test_drop_with_unknown_actor_location_records_only_release(self, world):
        sandra, apple, kitchen = world.get("Sandra"), world.get("apple"), world.get("kitchen")
        knowledge = Knowledge(world, exclusive=("is_in",))
        grab = Clause(world, True, sandra, actions.get, apple)
        release = Clause(world, True, sandra, actions.drop, apple)
        for clause in (grab, release):
            assert clause.is_valid(), clause
            clause.perform()
            knowledge.update(clause)

        ledger = knowledge.current().ledger(apple)
        assert ledger.get_value("is_in") is None
        assert ledger.is_false("is_in", sandra, return_support=True) == (True, {release})
        assert not ledger.is_true("is_in", kitchen)
        assert world.get_state(apple, "is_in") is kitchen

    def test_false_clause_does_not_change_world(self, world):
        john = world.get("John")
        Clause(world, False, john, actions.teleport, world.get("kitchen")).perform()
        assert world.location_of(john) is world.get("bathroom")


class TestClause:
    def test_repr(self, world):
        john, apple, mary = world.get("John"), world.get("apple"), world.get("Mary")
        assert repr(Clause(world, True, john, actions.give, apple, mary)) == "John give apple Mary"
        assert repr(Clause(world, False, john, actions.teleport, world.get("garden"))) == "not John teleport garden"

    def test_event_kind(self, world):
        clause = Clause(world, True, world.get("John"), actions.teleport, world.get("garden"))
        assert clause.kind.value == "event"

    def test_sample_valid_returns_valid_clause(self, world):
        rng = np.random.default_rng(3)
        for _ in range(20):
            clause = Clause.sample_valid(
                world, (True,), world.get_actors(), (actions.teleport,), world.get_locations(), rng=rng
            )
            assert clause is not None
            assert clause.is_valid()

    def test_sample_valid_gives_up(self, world):
        rng = np.random.default_rng(3)
        # Nobody holds anything, so nothing can be given
        clause = Clause.sample_valid(
            world, (True,), world.get_actors(), (actions.give,), world.get_objects(), world.get_actors(),
            rng=rng, max_attempts=50,
        )
        assert clause is None

    def test_sample_valid_empty_pool(self, world):
        rng = np.random.default_rng(0)
        assert Clause.sample_valid(world, (True,), [], (actions.teleport,), rng=rng) is None

    def test_question_repr(self, world):
        clause = Clause(world, True, world.get("John"), actions.teleport, world.get("garden"))
        question = Question("eval", clause, frozenset({clause}))
        assert repr(question) == "eval? John teleport garden"
