"""Tests for the CLI module."""

import pytest
from pathlib import Path
from unittest.mock import patch, MagicMock
from click.testing import CliRunner

from chainlaunch.cli import main, start_dev, mint_demo, check_node
from chainlaunch.contract import SignerUnavailableError
from chainlaunch.manifest import ConfigurationError
from chainlaunch.schemas import PipelineResult, Stage, StepResult

AGENT_NFT_ADDRESS = "0x342b37DeFD122d9E421f75895fd091900b792969"
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestCLI:
    """Test the command group."""

    def test_main_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "AgentChains" in result.output
        assert "start-dev" in result.output
        assert "mint-demo" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestStartDevCommand:
    """Test start-dev command."""

    @patch("chainlaunch.pipeline.DevEnvironment")
    def test_defaults_to_current_directory(self, mock_env_class, runner, project_root):
        mock_env_class.return_value.run.return_value = PipelineResult(
            stage=Stage.RUNNING, node_ready=True, completed=True, interrupted=True
        )

        with runner.isolated_filesystem(temp_dir=project_root.parent):
            result = runner.invoke(start_dev, [])
            cwd = Path.cwd()

        assert result.exit_code == 0
        config = mock_env_class.call_args[0][0]
        assert config.project_root == cwd.resolve()
        assert config.frontend_dir == cwd.resolve() / "frontend"
        assert config.rpc_url == "http://127.0.0.1:8545"

    @patch("chainlaunch.pipeline.DevEnvironment")
    def test_options_flow_into_config(self, mock_env_class, runner, project_root):
        mock_env_class.return_value.run.return_value = PipelineResult(node_ready=True)

        result = runner.invoke(start_dev, [
            "--project-root", str(project_root),
            "--deploy-script", "scripts/deploy.js",
            "--startup-delay", "0.5",
            "--readiness-attempts", "4",
        ])

        assert result.exit_code == 0
        config = mock_env_class.call_args[0][0]
        assert config.project_root == project_root.resolve()
        assert config.startup_delay == 0.5
        assert config.readiness_attempts == 4
        assert config.step(Stage.DEPLOYING).argv == [
            "npx", "hardhat", "run", "scripts/deploy.js", "--network", "localhost",
        ]

    @patch("chainlaunch.pipeline.DevEnvironment")
    def test_failed_step_exit_code(self, mock_env_class, runner, project_root):
        mock_env_class.return_value.run.return_value = PipelineResult(
            stage=Stage.DEPLOYING,
            node_ready=True,
            steps=[StepResult(stage=Stage.DEPLOYING, command=["npx"], exit_code=1)],
        )

        result = runner.invoke(start_dev, ["--project-root", str(project_root)])

        assert result.exit_code == 1

    def test_available_from_group(self, runner):
        result = runner.invoke(main, ["start-dev", "--help"])
        assert result.exit_code == 0
        assert "Ctrl+C" in result.output


class TestMintDemoCommand:
    """Test mint-demo command."""

    def _fake_contract(self, failing=()):
        contract = MagicMock()
        contract.default_signer.return_value = OWNER

        def mint_agent(owner, name, capabilities):
            if name in failing:
                raise RuntimeError("execution reverted")
            return MagicMock()

        contract.mint_agent.side_effect = mint_agent
        return contract

    @patch("chainlaunch.contract.AgentNFTContract.connect")
    def test_partial_failure_exits_zero(self, mock_connect, runner, tmp_path):
        """DataAnalyst failing still exits 0 with four successes."""
        mock_connect.return_value = self._fake_contract(failing={"DataAnalyst"})

        result = runner.invoke(
            mint_demo,
            ["--manifest-dir", str(tmp_path)],
            env={"AGENT_NFT_ADDRESS": AGENT_NFT_ADDRESS},
        )

        assert result.exit_code == 0
        assert result.output.count("✅ Minted") == 4
        assert "❌ Failed to mint DataAnalyst" in result.output
        mock_connect.assert_called_once_with("http://127.0.0.1:8545", AGENT_NFT_ADDRESS)

    @patch("chainlaunch.contract.AgentNFTContract.connect")
    def test_address_from_manifest(self, mock_connect, runner, manifest_dir):
        mock_connect.return_value = self._fake_contract()

        result = runner.invoke(mint_demo, ["--manifest-dir", str(manifest_dir)], env={"AGENT_NFT_ADDRESS": None})

        assert result.exit_code == 0
        assert mock_connect.call_args[0][1] == AGENT_NFT_ADDRESS

    @patch("chainlaunch.contract.AgentNFTContract.connect")
    def test_explicit_owner(self, mock_connect, runner, tmp_path):
        contract = self._fake_contract()
        mock_connect.return_value = contract
        owner = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

        result = runner.invoke(mint_demo, [
            "--contract-address", AGENT_NFT_ADDRESS,
            "--owner", owner,
            "--manifest-dir", str(tmp_path),
        ])

        assert result.exit_code == 0
        contract.default_signer.assert_not_called()
        assert all(c.args[0] == owner for c in contract.mint_agent.call_args_list)

    def test_missing_address_is_fatal(self, runner, tmp_path):
        result = runner.invoke(mint_demo, ["--manifest-dir", str(tmp_path)], env={"AGENT_NFT_ADDRESS": None})

        assert result.exit_code == 1
        assert isinstance(result.exception, ConfigurationError)

    @patch("chainlaunch.contract.AgentNFTContract.connect")
    def test_missing_signer_is_fatal(self, mock_connect, runner, tmp_path):
        contract = self._fake_contract()
        contract.default_signer.side_effect = SignerUnavailableError("no accounts")
        mock_connect.return_value = contract

        result = runner.invoke(mint_demo, ["--contract-address", AGENT_NFT_ADDRESS, "--manifest-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SignerUnavailableError)
        contract.mint_agent.assert_not_called()


class TestCheckNodeCommand:
    """Test check-node command."""

    @patch("chainlaunch.readiness.get_chain_id")
    def test_healthy(self, mock_chain_id, runner):
        mock_chain_id.return_value = 31337

        result = runner.invoke(check_node, [])

        assert result.exit_code == 0
        assert "healthy (chain id 31337)" in result.output
        assert "expected" not in result.output

    @patch("chainlaunch.readiness.get_chain_id")
    def test_unexpected_chain(self, mock_chain_id, runner):
        mock_chain_id.return_value = 1

        result = runner.invoke(check_node, ["--rpc-url", "http://127.0.0.1:9545"])

        assert result.exit_code == 0
        assert "expected the Hardhat chain id 31337" in result.output

    @patch("chainlaunch.readiness.get_chain_id")
    def test_unreachable(self, mock_chain_id, runner):
        mock_chain_id.return_value = None

        result = runner.invoke(check_node, [])

        assert result.exit_code == 1
        assert "unreachable" in result.output
