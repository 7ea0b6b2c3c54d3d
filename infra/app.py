#!/usr/bin/env python3
"""
CDK Application Entry Point

DynamoDB Playground - ストリーム付きテーブルと3つのストリームハンドラをデプロイ。
"""
import os
import aws_cdk as cdk

from infra.config import get_stage_config
from infra.stacks.playground_stack import DynamoDbPlaygroundStack

app = cdk.App()

# 環境設定 (開発時は cdk CLI のアカウント/リージョンを使う)
env = cdk.Environment(
    account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
    region=os.environ.get('CDK_DEFAULT_REGION', 'us-east-1'),
)

# `cdk deploy -c stage=prod` で本番スタック
stage = get_stage_config(app.node.try_get_context('stage'))

DynamoDbPlaygroundStack(
    app,
    stage.stack_id,
    stage=stage,
    env=env,
    description='DynamoDB Playground - table stream with insert/update/delete handlers',
)

app.synth()
