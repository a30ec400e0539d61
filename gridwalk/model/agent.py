"""Agent implementation."""

from enum import Enum

from .grid import Position


class AgentState(Enum):
    """Possible states for an agent."""
    MOVING = "moving"
    WAITING = "waiting"
    ARRIVED = "arrived"
    STUCK = "stuck"


class Agent:
    """
    Single mobile entity occupying exactly one cell.

    Agents do not see each other: several may share a cell.
    """

    def __init__(self, agent_id: int, position: Position):
        self.id = agent_id
        self.start = position
        self.position = position
        self.state = AgentState.WAITING
        self.steps_taken = 0
        self.stuck_ticks = 0

    def update_state(self, new_position: Position,
                     at_destination: bool, stuck: bool = False) -> None:
        """Update agent state based on movement result."""
        moved = new_position != self.position
        if stuck:
            self.state = AgentState.STUCK
            self.stuck_ticks += 1
        elif at_destination:
            self.state = AgentState.ARRIVED
        elif moved:
            self.state = AgentState.MOVING
        else:
            self.state = AgentState.WAITING

        if moved:
            self.steps_taken += 1
        self.position = new_position

    def __repr__(self) -> str:
        return (f"Agent(id={self.id}, pos={self.position}, "
                f"state={self.state.value})")
