"""
Object transfer questions: who gave what to whom.

Actors move around, pick objects up and hand them to each other. After
each give a few unrelated clauses follow before the give is asked about.
"""

from storyfacts.world import actions
from storyfacts.world.clause import Clause, Question
from storyfacts.world.world import World
from storyfacts.tasks.base import Task

QUESTIONS_PER_STORY = 5
MAX_DISTRACTORS = 5

ALLOWED_ACTIONS = (actions.get, actions.give, actions.teleport)


class WhoWhatGave(Task):
    name = "who_what_gave"

    def new_world(self) -> World:
        return World.basic()

    def sample_clause(self, world: World) -> Clause:
        clause = None
        while clause is None:
            action = self.choice(ALLOWED_ACTIONS)
            if action is actions.teleport:
                pools = (world.get_locations(),)
            elif action is actions.get:
                pools = (world.get_objects(),)
            else:
                pools = (world.get_objects(), world.get_actors())
            clause = Clause.sample_valid(
                world, (True,), world.get_actors(), (action,), *pools, rng=self.rng
            )
        return clause

    def _unrelated_clause(self, world: World, give: Clause) -> Clause:
        # Nothing more about the same object, nor the same giver handing the
        # same recipient something else
        thing, recipient = give.args
        while True:
            clause = self.sample_clause(world)
            if clause.args[0] is thing:
                continue
            if (clause.actor is give.actor and clause.action is actions.give
                    and clause.args[1] is recipient):
                continue
            return clause

    def generate_story(self, world, knowledge, story):
        num_questions = 0
        story_length = 0

        while num_questions < QUESTIONS_PER_STORY:
            clause = self.sample_clause(world)
            story_length += 1
            self._tell(clause, knowledge, story)

            if story_length > 1 and clause.action is actions.give:
                # Keep the asked-about clause from being the most recent one
                for _ in range(self.rng.integers(MAX_DISTRACTORS + 1)):
                    self._tell(self._unrelated_clause(world, clause), knowledge, story)
                story.append(Question("eval", clause, frozenset({clause})))
                num_questions += 1
                story_length = 0

        knowledge.augment_with_value_histories(world.get_objects(), "is_in", resolve_location=False)
        return story

    @staticmethod
    def _tell(clause: Clause, knowledge, story: list) -> None:
        clause.perform()
        story.append(clause)
        knowledge.update(clause)
