"""CDK App Entry Point Tests"""
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def synth_app(outdir: Path, context: dict, **env_overrides) -> dict:
    """`python -m infra.app` を実行し、クラウドアセンブリの manifest を返す"""
    env = {
        k: v for k, v in os.environ.items()
        if k not in ("CDK_DEFAULT_ACCOUNT", "CDK_DEFAULT_REGION")
    }
    env.update(env_overrides)
    env["CDK_OUTDIR"] = str(outdir)
    # Docker を使うアセットのバンドルはスキップ
    env["CDK_CONTEXT_JSON"] = json.dumps({**context, "aws:cdk:bundling-stacks": []})

    subprocess.run(
        [sys.executable, "-m", "infra.app"],
        cwd=PROJECT_ROOT,
        env=env,
        check=True,
        capture_output=True,
    )
    return json.loads((outdir / "manifest.json").read_text())


def stack_artifacts(manifest: dict) -> dict:
    return {
        name: artifact
        for name, artifact in manifest["artifacts"].items()
        if artifact["type"] == "aws:cloudformation:stack"
    }


class TestApp:
    """デプロイ先とステージの選択"""

    def test_default_stage_with_environment_target(self, tmp_path):
        # Act
        manifest = synth_app(
            tmp_path, {},
            CDK_DEFAULT_ACCOUNT="123456789012",
            CDK_DEFAULT_REGION="sa-east-1",
        )

        # Assert
        stacks = stack_artifacts(manifest)
        assert list(stacks) == ["dynamodb-playground-dev"]
        assert stacks["dynamodb-playground-dev"]["environment"] == (
            "aws://123456789012/sa-east-1"
        )

    def test_prod_stage_falls_back_to_us_east_1(self, tmp_path):
        """正常: -c stage=prod で本番スタック、リージョン未設定なら us-east-1"""
        manifest = synth_app(
            tmp_path, {"stage": "prod"},
            CDK_DEFAULT_ACCOUNT="123456789012",
        )

        stacks = stack_artifacts(manifest)
        assert list(stacks) == ["dynamodb-playground-prod"]
        assert stacks["dynamodb-playground-prod"]["environment"] == (
            "aws://123456789012/us-east-1"
        )

    def test_unknown_stage_fails(self, tmp_path):
        """異常: 未定義のステージでは synth しない"""
        with pytest.raises(subprocess.CalledProcessError) as exc_info:
            synth_app(tmp_path, {"stage": "staging"}, CDK_DEFAULT_ACCOUNT="123456789012")

        assert b"Unknown stage 'staging'" in exc_info.value.stderr
