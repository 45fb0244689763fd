"""
Agent Roster - addresses authorized to verify parcels.

Keeps an authorization flag per address and an ordered list for
enumeration. Revocation swaps the removed entry with the last one and
truncates, so enumeration order changes after any revocation.
"""

from land_registry.core.exceptions import AlreadyAgentError, NotAgentError


class AgentRoster:
    """Set of authorized verification agents."""

    def __init__(self):
        self._authorized: dict[str, bool] = {}
        self._agents: list[str] = []

    def __len__(self) -> int:
        return len(self._agents)

    def add(self, agent: str) -> None:
        """
        Authorize an address.

        Raises:
            AlreadyAgentError: If the address is already authorized
        """
        if self.is_agent(agent):
            raise AlreadyAgentError(f"{agent} is already an agent", agent=agent)

        self._authorized[agent] = True
        self._agents.append(agent)

    def revoke(self, agent: str) -> None:
        """
        Remove an address from the roster.

        Raises:
            NotAgentError: If the address is not currently authorized
        """
        if not self.is_agent(agent):
            raise NotAgentError(f"{agent} is not an agent", caller=agent)

        self._authorized[agent] = False
        for i, existing in enumerate(self._agents):
            if existing == agent:
                self._agents[i] = self._agents[-1]
                self._agents.pop()
                break

    def is_agent(self, address: str) -> bool:
        return self._authorized.get(address, False)

    def list(self) -> list[str]:
        """Return authorized agents in roster order."""
        return list(self._agents)
