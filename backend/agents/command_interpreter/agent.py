"""
Command Interpreter Agent
Classifies free-text file-management commands. Advisory only: the proposed
action is stored on the command record and never executed.
"""
import logging
from typing import Dict, Any

from pydantic import BaseModel, Field, ValidationError
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.agents.base_agent import BaseAgent
from backend.agents.command_interpreter.prompts import SYSTEM_PROMPT, COMMAND_PROMPT
from backend.models.ai_command import AICommand, CommandAction, CommandStatus
from backend.services.claude_service import ClaudeService

logger = logging.getLogger(__name__)

COMMAND_FAILED_RESULT = {"error": "Failed to process command"}


class CommandProposal(BaseModel):
    action: CommandAction
    description: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class CommandInterpreterAgent(BaseAgent):
    """Turns a command like 'put all invoices in Finance' into a proposal"""

    def __init__(self, claude: ClaudeService):
        super().__init__(name="CommandInterpreterAgent", claude=claude)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        proposal = await self.interpret(context["command"])
        return proposal.model_dump(mode="json")

    async def interpret(self, command: str) -> CommandProposal:
        """Ask Claude for a proposal; raises ValueError on a malformed reply"""
        raw = await self.generate_structured_response(
            prompt=COMMAND_PROMPT.format(command=command),
            system_prompt=SYSTEM_PROMPT,
            response_format={
                "action": "|".join(a.value for a in CommandAction),
                "description": "Description of what will be done",
                "parameters": {},
            },
        )
        try:
            return CommandProposal.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Malformed command response: {e}")

    async def process_command(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        command_id: int,
        command: str,
    ) -> None:
        """Interpret a stored command and write its single terminal update"""
        try:
            proposal = await self.interpret(command)
            values = {
                "result": proposal.model_dump(mode="json"),
                "status": CommandStatus.COMPLETED.value,
            }
        except Exception as e:
            logger.error(f"Error processing command {command_id}: {e}")
            values = {
                "result": COMMAND_FAILED_RESULT,
                "status": CommandStatus.FAILED.value,
            }

        async with session_factory() as session:
            await session.execute(
                update(AICommand).where(AICommand.id == command_id).values(**values)
            )
            await session.commit()

        logger.info(f"Command {command_id} finished with status {values['status']}")
