# FieldScope - Static Suggestion Data
# ===================================
"""
Precomputed typo corrections and field usage statistics per entity type.

Availability is the share of sampled entities where the field carries a
value; frequency is how often callers ask for it. Both tables are frozen
after import.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..fields.models import Frequency

H = Frequency.HIGH
M = Frequency.MEDIUM
L = Frequency.LOW


@dataclass(frozen=True)
class FieldUsage:
    """Usage statistics for one field."""
    frequency: Frequency = Frequency.MEDIUM
    availability: float = 0.5


@dataclass(frozen=True)
class EntitySuggestionData:
    """Immutable suggestion tables for one entity type."""
    entity_type: str
    typo_corrections: Mapping[str, str] = field(default_factory=dict)
    usage_statistics: Mapping[str, FieldUsage] = field(default_factory=dict)
    contextual_suggestions: Tuple[str, ...] = ()

    @property
    def known_fields(self) -> Tuple[str, ...]:
        """Every field name this entity can suggest, in a stable order."""
        seen = dict.fromkeys(self.usage_statistics)
        seen.update(dict.fromkeys(self.contextual_suggestions))
        seen.update(dict.fromkeys(self.typo_corrections.values()))
        return tuple(seen)

    def usage(self, field_name: str) -> FieldUsage:
        return self.usage_statistics.get(field_name, _DEFAULT_USAGE)


_DEFAULT_USAGE = FieldUsage()


def _build(entity_type: str,
           typos: Dict[str, str],
           usage: Dict[str, Tuple[Frequency, float]],
           contextual: Tuple[str, ...]) -> EntitySuggestionData:
    return EntitySuggestionData(
        entity_type=entity_type,
        typo_corrections=MappingProxyType({k.lower(): v for k, v in typos.items()}),
        usage_statistics=MappingProxyType({
            name: FieldUsage(frequency=freq, availability=avail)
            for name, (freq, avail) in usage.items()
        }),
        contextual_suggestions=contextual,
    )


ISSUE_SUGGESTIONS = _build(
    "issue",
    typos={
        "stat": "status", "staus": "status", "stauts": "status", "statu": "status",
        "sttus": "status", "state": "status",
        "assigne": "assignee", "asignee": "assignee", "assignee_": "assignee",
        "assign": "assignee", "assingee": "assignee",
        "summery": "summary", "sumary": "summary", "summay": "summary", "title": "summary",
        "desc": "description", "descripton": "description", "discription": "description",
        "priorty": "priority", "pririty": "priority", "prority": "priority",
        "prject": "project", "projet": "project", "proj": "project",
        "reporer": "reporter", "reportr": "reporter",
        "issuetpye": "issuetype", "issue_type": "issuetype", "type": "issuetype",
        "lables": "labels", "label": "labels", "tags": "labels",
        "componets": "components", "component": "components",
        "fixversion": "fixVersions", "fix_versions": "fixVersions", "fixversions": "fixVersions",
        "resoltion": "resolution", "resolutoin": "resolution",
        "creatd": "created", "create": "created",
        "udpated": "updated", "upated": "updated",
        "due": "duedate", "due_date": "duedate", "duedte": "duedate",
    },
    usage={
        "key": (H, 1.0),
        "summary": (H, 1.0),
        "status": (H, 1.0),
        "issuetype": (H, 1.0),
        "project": (H, 1.0),
        "created": (H, 1.0),
        "updated": (H, 1.0),
        "reporter": (H, 0.98),
        "priority": (H, 0.95),
        "assignee": (H, 0.85),
        "description": (H, 0.8),
        "labels": (M, 0.55),
        "resolution": (M, 0.5),
        "components": (M, 0.45),
        "fixVersions": (M, 0.35),
        "duedate": (L, 0.25),
        "parent": (L, 0.2),
    },
    contextual=("summary", "status", "assignee", "priority", "issuetype", "project", "key"),
)

PROJECT_SUGGESTIONS = _build(
    "project",
    typos={
        "nme": "name", "nmae": "name", "title": "name",
        "ky": "key", "kye": "key",
        "desc": "description", "descripton": "description",
        "lead_": "lead", "leed": "lead", "owner": "lead",
        "category": "projectCategory", "projectcategroy": "projectCategory",
        "type": "projectTypeKey", "projecttype": "projectTypeKey",
        "componets": "components", "component": "components",
        "version": "versions", "verisons": "versions",
    },
    usage={
        "key": (H, 1.0),
        "name": (H, 1.0),
        "id": (H, 1.0),
        "projectTypeKey": (M, 1.0),
        "self": (L, 1.0),
        "lead": (H, 0.95),
        "style": (L, 0.9),
        "description": (M, 0.6),
        "projectCategory": (M, 0.4),
        "components": (M, 0.5),
        "versions": (M, 0.45),
        "url": (L, 0.15),
    },
    contextual=("key", "name", "lead", "projectTypeKey"),
)

USER_SUGGESTIONS = _build(
    "user",
    typos={
        "displayname": "displayName", "display_name": "displayName", "dispalyname": "displayName",
        "fullname": "displayName",
        "email": "emailAddress", "emailaddress": "emailAddress", "emial": "emailAddress",
        "mail": "emailAddress",
        "accountid": "accountId", "account_id": "accountId", "acountid": "accountId",
        "timezone": "timeZone", "tz": "timeZone",
        "avatar": "avatarUrls", "avatars": "avatarUrls",
        "actve": "active", "enabled": "active",
        "group": "groups",
    },
    usage={
        "accountId": (H, 1.0),
        "displayName": (H, 1.0),
        "active": (M, 1.0),
        "self": (L, 1.0),
        "avatarUrls": (L, 1.0),
        "emailAddress": (H, 0.9),
        "timeZone": (L, 0.85),
        "locale": (L, 0.7),
        "name": (M, 0.6),
        "key": (M, 0.6),
        "groups": (L, 0.3),
    },
    contextual=("displayName", "emailAddress", "accountId"),
)

AGILE_SUGGESTIONS = _build(
    "agile",
    typos={
        "bord": "board", "baord": "board", "boards": "board",
        "sprnt": "sprint", "spirnt": "sprint", "sprints": "sprint", "iteration": "sprint",
        "epik": "epic", "epics": "epic",
        "sate": "state", "stat": "state",
        "goals": "goal", "gaol": "goal",
        "startdate": "startDate", "start": "startDate",
        "enddate": "endDate", "end": "endDate",
    },
    usage={
        "board": (H, 1.0),
        "sprint": (H, 0.95),
        "name": (H, 1.0),
        "id": (H, 1.0),
        "state": (H, 0.95),
        "type": (M, 1.0),
        "startDate": (M, 0.8),
        "endDate": (M, 0.8),
        "goal": (M, 0.4),
        "epic": (M, 0.6),
        "completeDate": (L, 0.5),
        "originBoardId": (L, 0.9),
    },
    contextual=("board", "sprint", "name", "state"),
)


SUGGESTION_DATA: Mapping[str, EntitySuggestionData] = MappingProxyType({
    data.entity_type: data
    for data in (ISSUE_SUGGESTIONS, PROJECT_SUGGESTIONS, USER_SUGGESTIONS, AGILE_SUGGESTIONS)
})
