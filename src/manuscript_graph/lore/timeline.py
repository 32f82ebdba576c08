"""Timeline contradiction detection.

Flags characters that die and then go on to speak or act.
"""

from dataclasses import dataclass

from loguru import logger

from ..extract.patterns import canonical_key
from ..models.contradictions import Claim, Contradiction, ContradictionType
from ..models.relationships import EntityGraph
from ..models.timeline import Timeline
from .patterns import ACTION_PATTERN, CLAIM_CONTEXT, DEATH_RULES

TIMELINE_SEVERITY = 0.95
ACTION_WINDOW = 100
ACTION_EXCERPT = 50


@dataclass
class DeathRecord:
    """Where a character's death is narrated."""

    offset: int
    end: int  # Mentions before this belong to the death phrase itself
    context: str


def find_deaths(text: str, timeline: Timeline | None = None) -> dict[str, DeathRecord]:
    """Map each lowercased name to its earliest narrated death."""
    deaths: dict[str, DeathRecord] = {}

    def keep(name: str, record: DeathRecord) -> None:
        current = deaths.get(name)
        if current is None or record.offset < current.offset:
            deaths[name] = record

    for death_rule in DEATH_RULES:
        for match in death_rule.matcher(text):
            name = match.capture(0)
            if name is None:
                continue
            context = text[max(0, match.start - CLAIM_CONTEXT) : match.end + CLAIM_CONTEXT]
            keep(canonical_key(name[0]), DeathRecord(match.start, match.end, context))

    if timeline is not None:
        for event in timeline.events:
            for death_rule in DEATH_RULES:
                for match in death_rule.matcher(event.description):
                    name = match.capture(0)
                    if name is None:
                        continue
                    # The description is read as starting at the event offset
                    end = event.offset + match.end
                    keep(canonical_key(name[0]), DeathRecord(event.offset, end, event.description))

    return deaths


def detect_timeline_contradictions(
    text: str,
    graph: EntityGraph,
    timeline: Timeline | None = None,
) -> list[Contradiction]:
    """Flag at most one action-after-death per character.

    Args:
        text: Chapter text the graph's mention offsets index into
        graph: Entity graph with mentions
        timeline: Optional events; descriptions that narrate a death count too

    Returns:
        Timeline contradictions in death discovery order
    """
    contradictions: list[Contradiction] = []

    for name, death in find_deaths(text, timeline).items():
        entity = graph.find_by_name(name)
        if entity is None:
            continue

        for mention in entity.mentions:
            if mention.offset < death.end:
                continue

            action_context = text[mention.offset : mention.offset + ACTION_WINDOW]
            if not ACTION_PATTERN.search(action_context):
                continue

            contradictions.append(
                Contradiction(
                    type=ContradictionType.TIMELINE,
                    entity_id=entity.id,
                    entity_name=entity.name,
                    claim1=Claim(text=death.context, offset=death.offset, value="death"),
                    claim2=Claim(
                        text=action_context[:ACTION_EXCERPT],
                        offset=mention.offset,
                        value="action after death",
                    ),
                    severity=TIMELINE_SEVERITY,
                    suggestion=(
                        f"{entity.name} appears to take action after their death. "
                        "Either the death scene or subsequent action needs revision."
                    ),
                )
            )
            break

    logger.debug(f"Found {len(contradictions)} timeline contradictions")
    return contradictions
