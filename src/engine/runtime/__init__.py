"""
どこで: `engine.runtime` サブパッケージ。
何を: イベント型・受信箱（EventLoop/Proxy）・起床スレッド（WakeProducer）・状態機械（Application）。
なぜ: 外部スレッドからの通知注入と、単一スレッドでの同期ディスパッチを分離して扱うため。
"""
