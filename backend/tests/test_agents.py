"""
Agent unit tests - test agent methods with mocked Claude responses.
"""
import pytest
from unittest.mock import AsyncMock, patch

from backend.agents.command_interpreter.agent import CommandInterpreterAgent, CommandProposal
from backend.agents.document_intelligence.agent import DocumentIntelligenceAgent
from backend.agents.folder_planner.agent import FolderPlannerAgent
from backend.config import Settings
from backend.models.ai_command import AICommand, CommandAction, CommandStatus
from backend.services.claude_service import ClaudeService


# ===================== CLAUDE SERVICE =====================


class TestClaudeService:

    def test_parse_json_strips_code_fence(self):
        parsed = ClaudeService.parse_json_object('```json\n{"tags": ["a"]}\n```')
        assert parsed == {"tags": ["a"]}

    def test_parse_json_rejects_non_json(self):
        with pytest.raises(ValueError, match="Failed to parse"):
            ClaudeService.parse_json_object("Sure! Here are your tags: a, b")

    def test_parse_json_rejects_non_object(self):
        with pytest.raises(ValueError, match="Expected a JSON object"):
            ClaudeService.parse_json_object('["a", "b"]')

    @pytest.mark.asyncio
    async def test_unconfigured_service_raises(self):
        service = ClaudeService(Settings(ANTHROPIC_API_KEY=""))
        assert service.is_available is False
        with pytest.raises(RuntimeError, match="not configured"):
            await service.generate_response("hello")


# ===================== DOCUMENT INTELLIGENCE =====================


class TestDocumentIntelligenceAgent:

    @pytest.mark.asyncio
    async def test_summary_is_trimmed(self, claude):
        agent = DocumentIntelligenceAgent(claude)
        claude.generate_response.return_value = "  Invoice for March consulting.  \n"

        summary = await agent.summarize_document("Invoice #7 ...", "invoice.pdf")

        assert summary == "Invoice for March consulting."

    @pytest.mark.asyncio
    async def test_empty_summary_is_an_error(self, claude):
        agent = DocumentIntelligenceAgent(claude)
        claude.generate_response.return_value = "   "

        with pytest.raises(ValueError, match="empty summary"):
            await agent.summarize_document("text", "file.pdf")

    @pytest.mark.asyncio
    async def test_document_text_is_truncated(self, claude):
        agent = DocumentIntelligenceAgent(claude, text_limit=10)
        claude.generate_response.return_value = "Summary"

        await agent.summarize_document("0123456789ABCDEFGHIJ", "long.pdf")

        prompt = claude.generate_response.call_args.args[0]
        assert "0123456789" in prompt
        assert "ABCDEFGHIJ" not in prompt

    @pytest.mark.asyncio
    async def test_tags_drop_blank_entries(self, claude):
        agent = DocumentIntelligenceAgent(claude)
        claude.generate_structured_response.return_value = {"tags": [" invoice ", "", "finance", "  "]}

        tags = await agent.generate_tags("Invoice #7", "invoice.pdf")

        assert tags == ["invoice", "finance"]

    @pytest.mark.asyncio
    async def test_missing_tags_key_is_an_error(self, claude):
        agent = DocumentIntelligenceAgent(claude)
        claude.generate_structured_response.return_value = {"labels": ["invoice"]}

        with pytest.raises(ValueError, match="Malformed tag response"):
            await agent.generate_tags("Invoice #7", "invoice.pdf")

    @pytest.mark.asyncio
    async def test_process_routes_actions(self, claude):
        agent = DocumentIntelligenceAgent(claude)

        with patch.object(agent, "generate_tags", new_callable=AsyncMock) as mock:
            mock.return_value = ["memo"]
            result = await agent.process({"action": "tag", "text": "memo", "file_name": "memo.txt"})

        assert result == {"tags": ["memo"]}
        unknown = await agent.process({"action": "translate", "text": "x", "file_name": "x"})
        assert "error" in unknown


# ===================== COMMAND INTERPRETER =====================


class TestCommandInterpreterAgent:

    @pytest.mark.asyncio
    async def test_interpret_valid_command(self, claude):
        agent = CommandInterpreterAgent(claude)
        claude.generate_structured_response.return_value = {
            "action": "move_files",
            "description": "Move all invoices into Finance",
            "parameters": {"query": "invoice", "targetFolder": "Finance"},
        }

        proposal = await agent.interpret("put my invoices in Finance")

        assert isinstance(proposal, CommandProposal)
        assert proposal.action == CommandAction.MOVE_FILES
        assert proposal.parameters["targetFolder"] == "Finance"

    @pytest.mark.asyncio
    async def test_unknown_action_is_an_error(self, claude):
        agent = CommandInterpreterAgent(claude)
        claude.generate_structured_response.return_value = {
            "action": "delete_everything",
            "description": "Nope",
        }

        with pytest.raises(ValueError, match="Malformed command response"):
            await agent.interpret("delete everything")

    @pytest.mark.asyncio
    async def test_process_command_completes(self, db_session, session_factory, seed_data, claude):
        agent = CommandInterpreterAgent(claude)
        command = AICommand(
            user_id=seed_data["user"].id,
            command="find my tax returns",
            status=CommandStatus.PROCESSING.value,
        )
        db_session.add(command)
        await db_session.commit()
        await db_session.refresh(command)

        claude.generate_structured_response.return_value = {
            "action": "search",
            "description": "Search for tax returns",
            "parameters": {"query": "tax return"},
        }

        await agent.process_command(session_factory, command.id, command.command)

        async with session_factory() as session:
            stored = await session.get(AICommand, command.id)
        assert stored.status == "completed"
        assert stored.result == {
            "action": "search",
            "description": "Search for tax returns",
            "parameters": {"query": "tax return"},
        }

    @pytest.mark.asyncio
    async def test_process_command_failure(self, db_session, session_factory, seed_data, claude):
        agent = CommandInterpreterAgent(claude)
        command = AICommand(
            user_id=seed_data["user"].id,
            command="organize",
            status=CommandStatus.PROCESSING.value,
        )
        db_session.add(command)
        await db_session.commit()
        await db_session.refresh(command)

        claude.generate_structured_response.side_effect = ValueError("Failed to parse Claude response as JSON")

        await agent.process_command(session_factory, command.id, command.command)

        async with session_factory() as session:
            stored = await session.get(AICommand, command.id)
        assert stored.status == "failed"
        assert stored.result == {"error": "Failed to process command"}


# ===================== FOLDER PLANNER =====================


class TestFolderPlannerAgent:

    @pytest.mark.asyncio
    async def test_plan_reads_camel_case_parent_ids(self, claude):
        agent = FolderPlannerAgent(claude)
        claude.generate_structured_response.return_value = {
            "folders": [
                {"name": "Clients", "parentId": None, "path": "Clients"},
                {"name": "Contracts", "parentId": 1, "path": "Clients/Contracts"},
                {"name": "Unstructured", "parentId": None, "path": "Unstructured"},
            ]
        }

        plan = await agent.generate_folder_structure(
            industry="legal",
            business_description="Small law firm",
            user_prompt="Organize by client",
            document_types=["contracts", "invoices"],
        )

        assert [f.name for f in plan] == ["Clients", "Contracts", "Unstructured"]
        assert plan[1].parent_id == 1
        prompt = claude.generate_structured_response.call_args.args[0]
        assert "contracts, invoices" in prompt

    @pytest.mark.asyncio
    async def test_missing_folders_key_gives_empty_plan(self, claude):
        agent = FolderPlannerAgent(claude)
        claude.generate_structured_response.return_value = {}

        plan = await agent.generate_folder_structure("retail", "Shop", "Keep it simple")

        assert plan == []

    @pytest.mark.asyncio
    async def test_malformed_plan_is_an_error(self, claude):
        agent = FolderPlannerAgent(claude)
        claude.generate_structured_response.return_value = {"folders": [{"parentId": 1}]}

        with pytest.raises(ValueError, match="Malformed folder structure"):
            await agent.generate_folder_structure("retail", "Shop", "Keep it simple")
