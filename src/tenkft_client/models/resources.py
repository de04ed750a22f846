"""10,000ft resource schemas.

Field lists follow the API documentation at
https://github.com/10Kft/10kft-api. Writable fields come first in each class.
"""

from dataclasses import dataclass
from typing import Any

from tenkft_client.models.base import Collection, Resource, server, writable


@dataclass
class Tag(Resource):
    """A tag attached to a user or project."""

    value: str = writable(default="")

    id: int = server(default=0)


class Tags(Collection[Tag]):
    item_type = Tag


@dataclass
class Assignment(Resource):
    """A user's allocation to a project or leave type."""

    allocation_mode: str = writable(default="")
    assignable_id: int = writable(default=0)
    ends_at: str = writable(default="")
    fixed_hours: float = writable(default=0.0, omit_if_default=True)
    hours_per_day: float = writable(default=0.0, omit_if_default=True)
    percent: float = writable(default=0.0, omit_if_default=True)
    starts_at: str = writable(default="")

    all_day_assignment: bool = server(default=False)
    bill_rate: float = server(default=0.0)
    bill_rate_id: int = server(default=0)
    created_at: str = server(default="")
    id: int = server(default=0)
    repetition_id: int = server(default=0)
    resource_request_id: int = server(default=0)
    status: str = server(default="")
    updated_at: str = server(default="")
    user_id: int = server(default=0)


class Assignments(Collection[Assignment]):
    item_type = Assignment


@dataclass
class Project(Resource):
    archived: bool = writable(default=False, omit_if_default=True)
    name: str = writable(default="", omit_if_default=True)
    ends_at: str = writable(default="", omit_if_default=True)
    starts_at: str = writable(default="", omit_if_default=True)
    description: str = writable(default="", omit_if_default=True)
    client: str = writable(default="", omit_if_default=True)
    project_state: str = writable(default="", omit_if_default=True)
    phase_name: str = writable(default="", omit_if_default=True)
    project_code: str = writable(default="", omit_if_default=True)

    id: int = server(default=0)
    archived_at: str = server(default="")
    guid: str = server(default="")
    parent_id: int = server(default=0)
    secure_url: str = server("secureurl", default="")
    secure_url_expiration: str = server("secureurl_expiration", default="")
    settings: Any = server(default=None)
    timeentry_lockout: Any = server(default=None)
    deleted_at: str = server(default="")
    created_at: str = server(default="")
    updated_at: str = server(default="")
    use_parent_bill_rates: bool = server(default=False)
    thumbnail: str = server(default="")
    type: str = server(default="")
    has_pending_updates: bool = server(default=False)
    tags: Tags = server(default_factory=Tags, decode=Tags.from_wire)
    assignments: Assignments = server(default_factory=Assignments, decode=Assignments.from_wire)
    bounding_startdate: str = server(default="")
    bounding_enddate: str = server(default="")
    confirmed_hours: float = server(default=0.0)
    confirmed_dollars: float = server(default=0.0)
    approved_hours: float = server(default=0.0)
    approved_dollars: float = server(default=0.0)
    unconfirmed_hours: float = server(default=0.0)
    unconfirmed_dollars: float = server(default=0.0)
    scheduled_hours: float = server(default=0.0)
    scheduled_dollars: float = server(default=0.0)
    future_hours: float = server(default=0.0)
    future_dollars: float = server(default=0.0)


class Projects(Collection[Project]):
    item_type = Project


@dataclass
class User(Resource):
    archived: bool = writable(default=False, omit_if_default=True)
    discipline: str = writable(default="")
    email: str = writable(default="")
    first_name: str = writable(default="")
    hire_date: Any = writable(default=None)
    last_name: str = writable(default="")
    location: str = writable(default="")
    mobile_phone: Any = writable(default=None)
    role: str = writable(default="")
    billability_target: float = writable(default=0.0)

    account_owner: bool = server(default=False)
    archived_at: str = server(default="")
    billable: bool = server(default=False)
    billrate: float = server(default=0.0)
    created_at: str = server(default="")
    deleted: bool = server(default=False)
    deleted_at: str = server(default="")
    display_name: str = server(default="")
    employee_number: Any = server(default=None)
    guid: str = server(default="")
    has_login: bool = server(default=False)
    id: int = server(default=0)
    invitation_pending: bool = server(default=False)
    login_type: str = server(default="")
    office_phone: Any = server(default=None)
    termination_date: str = server(default="")
    thumbnail: Any = server(default=None)
    type: str = server(default="")
    user_settings: float = server(default=0.0)
    user_type_id: int = server(default=0)
    tags: Tags = server(default_factory=Tags, decode=Tags.from_wire)
    assignments: Assignments = server(default_factory=Assignments, decode=Assignments.from_wire)


class Users(Collection[User]):
    item_type = User

    def non_owner_count(self) -> int:
        """Number of users who are not account owners."""
        return sum(1 for user in self.data if not user.account_owner)


@dataclass
class Phase(Resource):
    """A phase is a child project; it shares most of the project schema."""

    archived: bool = writable(default=False, omit_if_default=True)
    phase_name: str = writable(default="")
    ends_at: str = writable(default="")
    starts_at: str = writable(default="")

    id: int = server(default=0)
    archived_at: str = server(default="")
    description: str = server(default="")
    guid: str = server(default="")
    name: str = server(default="")
    parent_id: int = server(default=0)
    project_code: str = server(default="")
    secure_url: str = server("secureurl", default="")
    secure_url_expiration: str = server("secureurl_expiration", default="")
    settings: Any = server(default=None)
    timeentry_lockout: Any = server(default=None)
    deleted_at: str = server(default="")
    created_at: str = server(default="")
    updated_at: str = server(default="")
    use_parent_bill_rates: bool = server(default=False)
    thumbnail: str = server(default="")
    type: str = server(default="")
    has_pending_updates: bool = server(default=False)
    client: str = server(default="")
    project_state: str = server(default="")


class Phases(Collection[Phase]):
    item_type = Phase


@dataclass
class LeaveType(Resource):
    id: int = server(default=0)
    description: str = server(default="")
    guid: str = server(default="")
    name: str = server(default="")
    deleted_at: str = server(default="")
    created_at: str = server(default="")
    updated_at: str = server(default="")
    type: str = server(default="")


class LeaveTypes(Collection[LeaveType]):
    item_type = LeaveType

    def find_by_name(self, name: str) -> LeaveType | None:
        return self.find(lambda leave_type: leave_type.name == name)


@dataclass
class Role(Resource):
    id: int = server(default=0)
    value: str = server(default="")


class Roles(Collection[Role]):
    item_type = Role


@dataclass
class BillRate(Resource):
    id: int = server(default=0)
    rate: float = server(default=0.0)
    assignable_id: int = server(default=0)
    discipline_id: int = server(default=0)
    role_id: int = server(default=0)
    user_id: int = server(default=0)
    starts_at: str = server(default="")
    ends_at: str = server(default="")
    created_at: str = server(default="")
    updated_at: str = server(default="")
    startdate: str = server(default="")
    enddate: str = server(default="")


class BillRates(Collection[BillRate]):
    item_type = BillRate
