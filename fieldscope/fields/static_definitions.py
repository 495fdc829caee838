# FieldScope - Static Field Definitions
# =====================================
"""
Curated field definitions shipped with FieldScope.

Each entity type maps to a dict of FieldDefinition objects. The provider
copies these before handing them out, so nothing here is ever mutated.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .models import AccessPath, FieldDefinition, FieldSource, Confidence, Frequency

H = Frequency.HIGH
M = Frequency.MEDIUM
L = Frequency.LOW

PathSpec = Tuple[str, str, str, Frequency]


def _field(field_id: str,
           name: str,
           description: str,
           field_type: str,
           paths: Sequence[PathSpec],
           examples: Optional[List[str]] = None,
           common_usage: Optional[List[List[str]]] = None) -> FieldDefinition:
    """Build a static FieldDefinition from compact path tuples."""
    access_paths = [
        AccessPath(path=path, description=desc, type=value_type, frequency=freq)
        for path, desc, value_type, freq in paths
    ]
    if examples is None:
        examples = [ap.path for ap in access_paths if ap.frequency == H][:2] or \
            [ap.path for ap in access_paths[:1]]
    return FieldDefinition(
        id=field_id,
        name=name,
        description=description,
        type=field_type,
        access_paths=access_paths,
        examples=examples,
        common_usage=common_usage if common_usage is not None else [examples] if examples else [],
        source=FieldSource.STATIC,
        confidence=Confidence.HIGH,
    )


def _user_paths(prefix: str, detailed: bool = True) -> List[PathSpec]:
    """Access paths shared by every user-valued field."""
    paths = [
        (f"{prefix}.displayName", "User display name", "string", H),
        (f"{prefix}.emailAddress", "User email address", "string", H),
        (f"{prefix}.accountId", "User account ID", "string", M),
        (f"{prefix}.active", "User active status", "boolean", M),
        (f"{prefix}.name", "Username", "string", M),
        (f"{prefix}.key", "User key", "string", M),
        (f"{prefix}.self", "User REST API URL", "string", L),
    ]
    if detailed:
        paths += [
            (f"{prefix}.avatarUrls.48x48", "Large avatar URL", "string", L),
            (f"{prefix}.avatarUrls.24x24", "Small avatar URL", "string", L),
            (f"{prefix}.timeZone", "User time zone", "string", L),
        ]
    return paths


def _index(*fields: FieldDefinition) -> Dict[str, FieldDefinition]:
    return {f.id: f for f in fields}


# =============================================================================
# Issue
# =============================================================================

ISSUE_FIELDS = _index(
    _field("key", "Key", "Issue key (e.g., PROJ-123)", "string", [
        ("key", "Issue key", "string", H),
    ]),
    _field("summary", "Summary", "Issue title/summary", "string", [
        ("summary", "Issue summary text", "string", H),
    ]),
    _field("description", "Description", "Issue description body", "string", [
        ("description", "Issue description text", "string", H),
    ]),
    _field("status", "Status", "Current issue status and its category information", "object", [
        ("status.name", "Status name (e.g., 'In Progress', 'Done')", "string", H),
        ("status.statusCategory.key", "Status category key (todo/indeterminate/done)", "string", H),
        ("status.statusCategory.name", "Status category name", "string", M),
        ("status.statusCategory.id", "Status category ID", "string", L),
        ("status.statusCategory.colorName", "Status category color", "string", L),
        ("status.id", "Status ID", "string", M),
        ("status.description", "Status description", "string", L),
        ("status.iconUrl", "Status icon URL", "string", L),
        ("status.self", "Status REST API URL", "string", L),
    ], common_usage=[
        ["status.name", "status.statusCategory.key"],
        ["status.name", "status.id"],
        ["status.statusCategory.key"],
    ]),
    _field("assignee", "Assignee", "Issue assignee user information", "object",
           _user_paths("assignee"),
           common_usage=[["assignee.displayName", "assignee.emailAddress"], ["assignee.accountId"]]),
    _field("reporter", "Reporter", "Issue reporter user information", "object",
           _user_paths("reporter"),
           common_usage=[["reporter.displayName", "reporter.emailAddress"]]),
    _field("project", "Project", "Project the issue belongs to", "object", [
        ("project.key", "Project key", "string", H),
        ("project.name", "Project name", "string", H),
        ("project.id", "Project ID", "string", M),
        ("project.projectTypeKey", "Project type key", "string", L),
        ("project.projectCategory.name", "Project category name", "string", L),
        ("project.self", "Project REST API URL", "string", L),
    ]),
    _field("priority", "Priority", "Issue priority", "object", [
        ("priority.name", "Priority name (e.g., 'High')", "string", H),
        ("priority.id", "Priority ID", "string", M),
        ("priority.iconUrl", "Priority icon URL", "string", L),
    ]),
    _field("issuetype", "Issue Type", "Issue type classification", "object", [
        ("issuetype.name", "Issue type name (e.g., 'Bug')", "string", H),
        ("issuetype.id", "Issue type ID", "string", M),
        ("issuetype.subtask", "Whether the type is a subtask", "boolean", M),
        ("issuetype.description", "Issue type description", "string", L),
        ("issuetype.iconUrl", "Issue type icon URL", "string", L),
    ]),
    _field("resolution", "Resolution", "How the issue was resolved", "object", [
        ("resolution.name", "Resolution name (e.g., 'Fixed')", "string", H),
        ("resolution.id", "Resolution ID", "string", M),
        ("resolution.description", "Resolution description", "string", L),
    ]),
    _field("created", "Created", "Issue creation timestamp", "string", [
        ("created", "Creation date (ISO-8601)", "string", H),
    ]),
    _field("updated", "Updated", "Last update timestamp", "string", [
        ("updated", "Last update date (ISO-8601)", "string", H),
    ]),
    _field("duedate", "Due Date", "Issue due date", "string", [
        ("duedate", "Due date (YYYY-MM-DD)", "string", M),
    ]),
    _field("labels", "Labels", "Free-form issue labels", "array", [
        ("labels", "All labels", "string[]", H),
        ("labels[*]", "Each label", "string", M),
    ]),
    _field("components", "Components", "Project components the issue belongs to", "array", [
        ("components[].name", "Component name", "string", H),
        ("components[].id", "Component ID", "string", M),
        ("components[].description", "Component description", "string", L),
    ]),
    _field("fixVersions", "Fix Versions", "Versions the issue is fixed in", "array", [
        ("fixVersions[].name", "Fix version name", "string", H),
        ("fixVersions[].id", "Fix version ID", "string", M),
        ("fixVersions[].releaseDate", "Fix version release date", "string", M),
        ("fixVersions[].released", "Fix version released flag", "boolean", M),
    ], common_usage=[["fixVersions[].name", "fixVersions[].released"]]),
    _field("parent", "Parent", "Parent issue for subtasks", "object", [
        ("parent.key", "Parent issue key", "string", M),
        ("parent.id", "Parent issue ID", "string", L),
        ("parent.fields.summary", "Parent issue summary", "string", L),
    ]),
)


# =============================================================================
# Project
# =============================================================================

PROJECT_FIELDS = _index(
    _field("key", "Key", "Project key (e.g., PROJ)", "string", [
        ("key", "Project key", "string", H),
    ]),
    _field("name", "Name", "Project display name", "string", [
        ("name", "Project name", "string", H),
    ]),
    _field("id", "ID", "Project numeric ID", "string", [
        ("id", "Project ID", "string", M),
    ]),
    _field("description", "Description", "Project description", "string", [
        ("description", "Project description text", "string", M),
    ]),
    _field("lead", "Lead", "Project lead user", "object", _user_paths("lead")),
    _field("projectCategory", "Project Category", "Category the project belongs to", "object", [
        ("projectCategory.name", "Category name", "string", M),
        ("projectCategory.id", "Category ID", "string", L),
        ("projectCategory.description", "Category description", "string", L),
    ]),
    _field("projectTypeKey", "Project Type", "Project type key (software, business)", "string", [
        ("projectTypeKey", "Project type key", "string", M),
    ]),
    _field("components", "Components", "Components defined in the project", "array", [
        ("components[].name", "Component name", "string", H),
        ("components[].id", "Component ID", "string", M),
        ("components[].lead.displayName", "Component lead name", "string", L),
    ]),
    _field("versions", "Versions", "Versions defined in the project", "array", [
        ("versions[].name", "Version name", "string", H),
        ("versions[].id", "Version ID", "string", M),
        ("versions[].released", "Version released flag", "boolean", M),
        ("versions[].archived", "Version archived flag", "boolean", L),
        ("versions[].releaseDate", "Version release date", "string", M),
    ]),
    _field("style", "Style", "Project style (classic, next-gen)", "string", [
        ("style", "Project style", "string", L),
    ]),
    _field("url", "URL", "Project URL", "string", [
        ("url", "Project URL", "string", L),
    ]),
    _field("self", "Self", "Project REST API URL", "string", [
        ("self", "REST API URL", "string", L),
    ]),
)


# =============================================================================
# User
# =============================================================================

USER_FIELDS = _index(
    _field("displayName", "Display Name", "User display name", "string", [
        ("displayName", "Display name", "string", H),
    ]),
    _field("emailAddress", "Email Address", "User email address", "string", [
        ("emailAddress", "Email address", "string", H),
    ]),
    _field("accountId", "Account ID", "Unique account identifier", "string", [
        ("accountId", "Account ID", "string", H),
    ]),
    _field("name", "Name", "Username", "string", [
        ("name", "Username", "string", M),
    ]),
    _field("key", "Key", "User key", "string", [
        ("key", "User key", "string", M),
    ]),
    _field("active", "Active", "Whether the user account is active", "string", [
        ("active", "Active flag", "boolean", M),
    ]),
    _field("timeZone", "Time Zone", "User time zone", "string", [
        ("timeZone", "Time zone ID", "string", L),
    ]),
    _field("locale", "Locale", "User locale", "string", [
        ("locale", "Locale code", "string", L),
    ]),
    _field("avatarUrls", "Avatar URLs", "User avatar images", "object", [
        ("avatarUrls.48x48", "Large avatar URL", "string", M),
        ("avatarUrls.24x24", "Small avatar URL", "string", L),
        ("avatarUrls.16x16", "Extra-small avatar URL", "string", L),
        ("avatarUrls.32x32", "Medium avatar URL", "string", L),
    ]),
    _field("groups", "Groups", "Groups the user belongs to", "object", [
        ("groups.size", "Number of groups", "number", M),
        ("groups.items[].name", "Group name", "string", M),
    ]),
    _field("self", "Self", "User REST API URL", "string", [
        ("self", "REST API URL", "string", L),
    ]),
)


# =============================================================================
# Agile: boards, sprints, epics
# =============================================================================

_BOARD = _field("board", "Board", "Agile board information", "object", [
    ("board.id", "Board ID", "number", H),
    ("board.name", "Board name", "string", H),
    ("board.type", "Board type (scrum, kanban)", "string", H),
    ("board.location.projectKey", "Project key of the board location", "string", M),
    ("board.location.projectName", "Project name of the board location", "string", M),
    ("board.location.displayName", "Board location display name", "string", L),
    ("board.self", "Board REST API URL", "string", L),
])

_SPRINT = _field("sprint", "Sprint", "Sprint information", "object", [
    ("sprint.id", "Sprint ID", "number", H),
    ("sprint.name", "Sprint name", "string", H),
    ("sprint.state", "Sprint state (future, active, closed)", "string", H),
    ("sprint.startDate", "Sprint start date", "string", M),
    ("sprint.endDate", "Sprint end date", "string", M),
    ("sprint.completeDate", "Sprint completion date", "string", L),
    ("sprint.originBoardId", "Board the sprint was created on", "number", L),
    ("sprint.goal", "Sprint goal", "string", M),
])

_EPIC = _field("epic", "Epic", "Epic information", "object", [
    ("epic.id", "Epic ID", "number", M),
    ("epic.key", "Epic issue key", "string", H),
    ("epic.name", "Epic name", "string", H),
    ("epic.summary", "Epic summary", "string", M),
    ("epic.done", "Whether the epic is done", "boolean", M),
    ("epic.color.key", "Epic color key", "string", L),
])

AGILE_FIELDS = _index(_BOARD, _SPRINT, _EPIC)

BOARD_FIELDS = _index(
    _field("id", "ID", "Board ID", "string", [("id", "Board ID", "number", H)]),
    _field("name", "Name", "Board name", "string", [("name", "Board name", "string", H)]),
    _field("type", "Type", "Board type (scrum, kanban, simple)", "string", [
        ("type", "Board type", "string", H),
    ]),
    _field("location", "Location", "Project or user the board belongs to", "object", [
        ("location.projectKey", "Project key", "string", H),
        ("location.projectId", "Project ID", "number", M),
        ("location.projectName", "Project name", "string", M),
        ("location.displayName", "Location display name", "string", L),
    ]),
    _field("self", "Self", "Board REST API URL", "string", [("self", "REST API URL", "string", L)]),
)

SPRINT_FIELDS = _index(
    _field("id", "ID", "Sprint ID", "string", [("id", "Sprint ID", "number", H)]),
    _field("name", "Name", "Sprint name", "string", [("name", "Sprint name", "string", H)]),
    _field("state", "State", "Sprint state (future, active, closed)", "string", [
        ("state", "Sprint state", "string", H),
    ]),
    _field("startDate", "Start Date", "Sprint start date", "string", [
        ("startDate", "Start date (ISO-8601)", "string", M),
    ]),
    _field("endDate", "End Date", "Sprint end date", "string", [
        ("endDate", "End date (ISO-8601)", "string", M),
    ]),
    _field("completeDate", "Complete Date", "Sprint completion date", "string", [
        ("completeDate", "Completion date (ISO-8601)", "string", L),
    ]),
    _field("originBoardId", "Origin Board", "Board the sprint was created on", "string", [
        ("originBoardId", "Origin board ID", "number", L),
    ]),
    _field("goal", "Goal", "Sprint goal", "string", [("goal", "Sprint goal text", "string", M)]),
)


# =============================================================================
# Worklog
# =============================================================================

WORKLOG_FIELDS = _index(
    _field("id", "ID", "Worklog ID", "string", [("id", "Worklog ID", "string", M)]),
    _field("issueId", "Issue ID", "ID of the issue the work was logged on", "string", [
        ("issueId", "Issue ID", "string", M),
    ]),
    _field("author", "Author", "User who logged the work", "object",
           _user_paths("author", detailed=False)),
    _field("updateAuthor", "Update Author", "User who last updated the worklog", "object",
           _user_paths("updateAuthor", detailed=False)),
    _field("comment", "Comment", "Worklog comment", "string", [
        ("comment", "Comment text", "string", M),
    ]),
    _field("started", "Started", "When the work started", "string", [
        ("started", "Start timestamp (ISO-8601)", "string", H),
    ]),
    _field("timeSpent", "Time Spent", "Time spent in human-readable form", "string", [
        ("timeSpent", "Time spent (e.g., '3h 20m')", "string", H),
    ]),
    _field("timeSpentSeconds", "Time Spent Seconds", "Time spent in seconds", "string", [
        ("timeSpentSeconds", "Time spent in seconds", "number", H),
    ]),
    _field("created", "Created", "Worklog creation timestamp", "string", [
        ("created", "Creation date (ISO-8601)", "string", M),
    ]),
    _field("updated", "Updated", "Worklog update timestamp", "string", [
        ("updated", "Update date (ISO-8601)", "string", L),
    ]),
)


# Custom fields are instance specific; everything comes from dynamic discovery.
CUSTOM_FIELDS: Dict[str, FieldDefinition] = {}


STATIC_FIELD_DEFINITIONS: Dict[str, Dict[str, FieldDefinition]] = {
    "issue": ISSUE_FIELDS,
    "project": PROJECT_FIELDS,
    "user": USER_FIELDS,
    "agile": AGILE_FIELDS,
    "board": BOARD_FIELDS,
    "sprint": SPRINT_FIELDS,
    "worklog": WORKLOG_FIELDS,
    "custom": CUSTOM_FIELDS,
}

STATIC_DEFINITION_VERSION = "1.0.0"
