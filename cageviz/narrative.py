"""Human-readable names for mice and one-line stories for cage events.

Narration is purely cosmetic. The processor logs the line produced here for
every event, but a failure to build a line never stops the event from being
applied.
"""

from __future__ import annotations

from cageviz.core.events import (
    AbnormalTermination,
    Arrival,
    CageEvent,
    FightOutcome,
    FightResult,
    MateOutcome,
    MateResult,
    OverpopulationCull,
    Retirement,
    SimulationEnd,
    SimulationStart,
    TerminationKind,
)
from cageviz.core.mouse import Mouse, ParticipantDirectory, Sex
from cageviz.core.registry import EntityRegistry

FEMININE_NAMES = (
    "Monica", "Danielle", "Zena", "Brianna", "Katie", "Lacy",
    "Leela", "Suzy", "Saphira", "Missie", "Flo", "Lisa",
)
MASCULINE_NAMES = (
    "Neil", "Chris", "Charlie", "Camden", "Rick", "Dean",
    "Xavier", "Zeke", "Han", "Samuel", "Wade", "Patrick",
)

_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
    (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def romanize(value: int) -> str:
    """Roman numeral for 1..3999; other values are returned as digits."""
    if value <= 0 or value >= 4000:
        return str(value)
    numeral = []
    for decimal, roman in _ROMAN:
        while value >= decimal:
            value -= decimal
            numeral.append(roman)
    return "".join(numeral)


def mouse_name(
    mouse: Mouse,
    participants: ParticipantDirectory,
    show_stats: bool = False,
    show_genes: bool = False,
) -> str:
    """Display name for a mouse, e.g. ``"Zeke II (Male Alice/Bob/Bob)"``.

    Females take a feminine name and males a masculine one. Hermaphrodites
    alternate by id parity: even ids are named from the feminine list, odd
    ids from the masculine list, so hermaphrodites spread evenly over both.

    Args:
        mouse: The mouse to name.
        participants: Directory used to label the behavior owners.
        show_stats: Append ``[id:../size:../sex: ..]``.
        show_genes: Append the sex and owner labels.
    """
    feminine = mouse.sex is Sex.FEMALE or (
        mouse.sex is Sex.HERMAPHRODITE and mouse.id % 2 == 0
    )
    names = FEMININE_NAMES if feminine else MASCULINE_NAMES
    name = names[mouse.id % len(names)]
    ordinal = mouse.id // len(names) + 1
    if ordinal > 1:
        name += " " + romanize(ordinal)

    if show_genes:
        name += (
            f" ({mouse.sex.value} {participants.label(mouse.choose_mate_owner)}"
            f"/{participants.label(mouse.mate_answer_owner)}"
            f"/{participants.label(mouse.pick_fight_owner)})"
        )
    if show_stats:
        name += f" [id:{mouse.id}/size:{mouse.size}/sex: {mouse.sex.value}]"
    return name


def describe(
    event: CageEvent, registry: EntityRegistry, participants: ParticipantDirectory
) -> str:
    """Narrate an event. Must be called before the event is applied.

    Raises:
        KeyError: If a referenced mouse or participant label is missing.
    """

    def name(mouse_id: int, full: bool = False) -> str:
        return mouse_name(registry.get(mouse_id), participants, full, full)

    if isinstance(event, Arrival):
        return f"{mouse_name(event.mouse, participants, True, True)} added to game."

    if isinstance(event, SimulationStart):
        return f"Game started with {len(registry)} mice."

    if isinstance(event, FightOutcome):
        me = name(event.instigator_id)
        result = event.result
        if result is FightResult.NONE:
            return f"{me} elected to never fight again."
        if result is FightResult.INVALID:
            return f"{me} is confused and wont fight again."
        if result is FightResult.SELF:
            return (
                f"{me} chose itself when asked whom to fight with. "
                f"{me} is being executed to put it out of its misery."
            )
        them = name(event.opponent_id)
        if result is FightResult.WIN:
            return f"{me} fights and kills {them}."
        if result is FightResult.TIE:
            return f"{me} fights {them} to a draw."
        return f"{me} fights and is killed by {them}."

    if isinstance(event, MateOutcome):
        result = event.result
        if result is MateResult.NONE:
            return f"{name(event.proposer_id)} elected to never mate again."
        if result is MateResult.INVALID:
            return f"{name(event.proposer_id)} is confused wont mate again."
        if result is MateResult.SELF:
            return f"{name(event.proposer_id)} caught trying to mate with itself."
        me = name(event.proposer_id)
        them = name(event.partner_id)
        if result is MateResult.INCOMPATIBLE:
            sex = registry.get(event.proposer_id).sex.value
            return f"{me} mated with {them}, another {sex}."
        if result is MateResult.INFERTILE:
            return f"Mating between {me} and {them} failed because {them} is sterile."
        if result is MateResult.MATE_EXPLODED:
            return f"{them} exploded after {me} asked it out."
        if result is MateResult.REJECTION:
            return f"{me} asked {them} to mate, The answer is NO!"
        baby = mouse_name(event.offspring, participants, True, True)
        return (
            f"{name(event.proposer_id, True)} asked {name(event.partner_id, True)} "
            f"to mate, The answer is YES! {baby} was born!"
        )

    if isinstance(event, Retirement):
        return f"{name(event.mouse_id)} dies after a productive life."

    if isinstance(event, OverpopulationCull):
        return (
            f"Cage has gotten too cramped {name(event.mouse_id)} can't compete "
            "with the younger mice and dies."
        )

    if isinstance(event, AbnormalTermination):
        if event.termination is TerminationKind.SPIN:
            return f"{name(event.mouse_id)} spun in circles after {event.source} was called."
        return f"{name(event.mouse_id)} exploded in {event.source} because {event.cause}"

    if isinstance(event, SimulationEnd):
        return (
            f"Game ended because {event.cause}. PickFight Winner: "
            f"{event.pick_fight_winner} chooseMate Winner: {event.choose_mate_winner} "
            f"mateAnswer Winner: {event.mate_answer_winner}"
        )

    raise TypeError(f"Cannot narrate {type(event).__name__}")
