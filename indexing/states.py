import enum


class IndexState(enum.Enum):
    # no relation by that name in the current schema
    ABSENT = 'absent'
    # CREATE INDEX CONCURRENTLY still running
    BUILDING = 'building'
    VALID = 'valid'
    # left behind by an interrupted concurrent build; the planner ignores it
    INVALID = 'invalid'
    # the name belongs to a table, view, sequence...
    CONFLICT = 'conflict'
