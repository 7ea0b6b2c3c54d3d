"""
Lambda Handlers for DynamoDB Playground

テーブルのストリームに接続されたエントリポイント:
- insert (INSERT)
- update (MODIFY)
- delete (REMOVE)
"""
