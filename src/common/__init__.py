"""
どこで: `common` パッケージ。
何を: 環境変数ヘルパ・設定スナップショット・ロギング初期化などの軽量ユーティリティ。
なぜ: API/engine 双方から使う共通基盤を分離し、依存の向きを単純化するため。
"""
