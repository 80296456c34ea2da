"""Classify a migration session as copy, move or change."""

from zoneshift.core.models import MigrationKind, MigrationPlan, MigrationSession

MOVE_CONFIRMATION = "moving the zone to the destination account"


def classify(session: MigrationSession) -> MigrationPlan:
    """
    Decide what committing the session would do.

    - No destination name: copy, not committable yet
    - Different name: copy into a new zone
    - Same name, same account: change the records in place
    - Same name, other account: move, which deletes the source zone and so
      needs explicit confirmation

    Accounts are compared by name.
    """
    name = session.destination_zone_name

    if not name:
        return MigrationPlan(kind=MigrationKind.COPY, committable=False)

    if name != session.source_zone.name:
        return MigrationPlan(kind=MigrationKind.COPY, committable=True)

    if session.destination_account.name == session.source_account.name:
        return MigrationPlan(kind=MigrationKind.CHANGE, committable=True)

    return MigrationPlan(
        kind=MigrationKind.MOVE,
        committable=session.confirmed,
        confirmation_required=True,
        confirmation_message=MOVE_CONFIRMATION,
    )
