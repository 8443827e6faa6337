"""Data structures for the parties that start and finish submissions."""

import hashlib
from typing import Any, Optional, Union

from dataclasses import dataclass, field

__all__ = ('Agent', 'User', 'Client', 'agent_factory')


@dataclass
class Agent:
    """
    Base class for agents in the submission system.

    An agent is the authenticated party on whose behalf a wizard session runs.
    Authentication itself happens elsewhere; the workflow only records who
    the creator of a submission was.
    """

    native_id: str
    """Type-specific identifier for the agent, e.g. a user id or hostname."""

    def __post_init__(self) -> None:
        """Set derivative fields."""
        self.agent_type = self.__class__.get_agent_type()
        self.agent_identifier = self.get_agent_identifier()

    @classmethod
    def get_agent_type(cls) -> str:
        """Get the name of the instance's class."""
        return cls.__name__

    def get_agent_identifier(self) -> str:
        """
        Get the unique identifier for this agent instance.

        Based on both the agent type and native ID.
        """
        h = hashlib.new('sha1')
        h.update(b'%s:%s' % (self.agent_type.encode('utf-8'),
                             str(self.native_id).encode('utf-8')))
        return h.hexdigest()

    def __eq__(self, other: Any) -> bool:
        """Equality comparison for agents based on type and identifier."""
        if not isinstance(other, self.__class__):
            return False
        return self.agent_identifier == other.agent_identifier


@dataclass(eq=False)
class User(Agent):
    """An (human) author or submitter."""

    email: str = field(default_factory=str)
    forename: str = field(default_factory=str)
    surname: str = field(default_factory=str)
    name: str = field(default_factory=str)
    affiliation: str = field(default_factory=str)
    agent_type: str = field(default_factory=str)
    agent_identifier: str = field(default_factory=str)

    def __post_init__(self) -> None:
        """Set derivative fields."""
        super(User, self).__post_init__()
        self.name = self.get_name()

    def get_name(self) -> str:
        """Full name of the user."""
        return f"{self.forename} {self.surname}".strip()


@dataclass(eq=False)
class Client(Agent):
    """A non-human third party, usually an API client."""

    hostname: Optional[str] = field(default=None)
    """Hostname or IP address from which client requests are originating."""

    agent_type: str = field(default_factory=str)
    agent_identifier: str = field(default_factory=str)


_agent_types = {
    User.get_agent_type(): User,
    Client.get_agent_type(): Client,
}


def agent_factory(**data: Union[Agent, dict]) -> Agent:
    """Instantiate a subclass of :class:`.Agent`."""
    agent_type = data.pop('agent_type', None)
    native_id = data.pop('native_id', None)
    if not agent_type or not native_id:
        raise ValueError('No such agent: %s, %s' % (agent_type, native_id))
    if agent_type not in _agent_types:
        raise ValueError(f'No such agent type: {agent_type}')
    klass = _agent_types[agent_type]
    data = {k: v for k, v in data.items() if k in klass.__dataclass_fields__
            and k not in ('agent_identifier',)}
    return klass(native_id, **data)
