"""
Tests for target legality.
"""

import pytest
from character.combatant import Combatant
from character.skill import Skill
from combat.session import CombatSession
from combat.targeting import TargetValidator
from core.config import CombatConfig, TargetingRules
from core.constants import ActionKind, Side
from core.content import ContentRepository
from core.errors import InvalidAction


@pytest.fixture
def validator(config, catalog):
    return TargetValidator(config, catalog)


def test_skill_with_healing_is_healing_class(validator, heal_skill, strike_skill):
    assert validator.is_healing_skill(heal_skill)
    assert not validator.is_healing_skill(strike_skill)


def test_skill_tagged_support_is_healing_class(validator, cure_skill):
    assert validator.is_healing_skill(cure_skill)


def test_skill_listed_by_id_is_healing_class(catalog):
    config = CombatConfig(targeting=TargetingRules(healing_skill_ids={"rally"}))
    validator = TargetValidator(config, catalog)

    assert validator.is_healing_skill(Skill(id="rally", name="Rally"))
    assert not validator.is_healing_skill(Skill(id="taunt", name="Taunt"))


def test_tag_sets_come_from_configuration(catalog, cure_skill):
    config = CombatConfig(targeting=TargetingRules(healing_tags=set()))
    validator = TargetValidator(config, catalog)

    assert not validator.is_healing_skill(cure_skill)


def test_items_classified_by_tag(validator, catalog):
    assert validator.is_healing_item(catalog.get("stimpak"))
    assert not validator.is_healing_item(catalog.get("frag_grenade"))


def test_legal_targets_exclude_defeated(skirmish, validator, ally, medic, ghoul):
    state = skirmish.state
    ghoul.health = 0
    medic.health = 0

    assert validator.legal_targets(state, ally, ActionKind.ATTACK) == [2]
    assert validator.legal_targets(state, ally, ActionKind.SKILL, "heal") == [0]


def test_flee_has_no_targets(skirmish, validator, ally):
    with pytest.raises(InvalidAction):
        validator.legal_targets(skirmish.state, ally, ActionKind.FLEE)


def test_no_legal_target_is_invalid_action(skirmish, validator, ally):
    ally.skills.append(Skill(id="bandage", name="Bandage", healing=5))
    for combatant in skirmish.state.get_side(Side.ALLY):
        combatant.health = 0

    with pytest.raises(InvalidAction, match="No legal target"):
        validator.validate_target(
            skirmish.state, ally, ActionKind.SKILL, "bandage", 0
        )


def _combatant(combatant_id, side, skills=()):
    return Combatant(
        id=combatant_id,
        name=combatant_id.title(),
        side=side,
        health=50,
        max_health=50,
        energy=99,
        max_energy=99,
        skills=list(skills),
    )


@pytest.mark.parametrize("side", [Side.ALLY, Side.ENEMY])
def test_catalog_targeting_never_crosses_sides(data_dir, side):
    """
    Test every shipped skill and item: healing-class actions only reach the
    acting side and damaging actions only reach the opposing side.
    """
    repo = ContentRepository(data_dir)
    catalog = repo.item_catalog()
    validator = TargetValidator(repo.config, catalog)
    healing_seen = damaging_seen = 0

    for skill in repo.skills.values():
        actor = _combatant("actor", side, [skill.model_copy(deep=True)])
        session = CombatSession.initialize(
            [
                actor,
                _combatant("friend", side),
                _combatant("foe", side.opposite),
                _combatant("other_foe", side.opposite),
            ],
            config=repo.config,
            catalog=catalog,
        )
        state = session.state
        targets = validator.legal_targets(state, actor, ActionKind.SKILL, skill.id)
        sides = {state.participants[i].side for i in targets}
        if validator.is_healing_skill(skill):
            healing_seen += 1
            assert sides == {side}, skill.id
        else:
            damaging_seen += 1
            assert sides == {side.opposite}, skill.id

        for item in catalog.items.values():
            targets = validator.legal_targets(state, actor, ActionKind.ITEM, item.id)
            sides = {state.participants[i].side for i in targets}
            expected = side if validator.is_healing_item(item) else side.opposite
            assert sides == {expected}, item.id

    assert healing_seen > 0
    assert damaging_seen > 0


def test_shipped_support_skills_are_healing_class(data_dir):
    repo = ContentRepository(data_dir)
    validator = TargetValidator(repo.config, repo.item_catalog())

    for skill_id in ["heal", "stimpack", "cure", "adrenaline_shot", "defensive_stance"]:
        assert validator.is_healing_skill(repo.get_skill(skill_id)), skill_id
    for skill_id in ["slash", "poison_dart", "shock_trap", "explosive_shot"]:
        assert not validator.is_healing_skill(repo.get_skill(skill_id)), skill_id
