"""Demo roster loaded into the store at startup."""
from __future__ import annotations

from ..sites.model import Site
from ..workers.model import Worker

DEMO_WORKERS: tuple[Worker, ...] = (
    # 山田建設
    Worker(id="w1", name="山田 太郎", company="山田建設", occupation="現場監督", avatar_url="https://picsum.photos/id/1005/100/100"),
    Worker(id="w1-2", name="石川 健", company="山田建設", occupation="現場事務", avatar_url="https://picsum.photos/id/1003/100/100"),
    # 鈴木電設
    Worker(id="w2", name="鈴木 一郎", company="鈴木電設", occupation="電気工事士", avatar_url="https://picsum.photos/id/1012/100/100"),
    Worker(id="w2-2", name="鈴木 次郎", company="鈴木電設", occupation="電気工事士", avatar_url="https://picsum.photos/id/1025/100/100"),
    Worker(id="w2-3", name="電気屋 サブ", company="鈴木電設", occupation="見習い", avatar_url="https://picsum.photos/id/1024/100/100"),
    # 佐藤内装
    Worker(id="w3", name="佐藤 花子", company="佐藤内装", occupation="内装工", avatar_url="https://picsum.photos/id/1027/100/100"),
    # 田中配管
    Worker(id="w4", name="田中 健太", company="田中配管", occupation="配管工", avatar_url="https://picsum.photos/id/1011/100/100"),
    # 高橋塗装
    Worker(id="w5", name="高橋 優", company="高橋塗装", occupation="塗装工", avatar_url="https://picsum.photos/id/1006/100/100"),
    Worker(id="w5-2", name="高橋 誠", company="高橋塗装", occupation="塗装工", avatar_url="https://picsum.photos/id/1008/100/100"),
)

DEMO_SITES: tuple[Site, ...] = (
    Site(id="s1", name="渋谷桜丘プロジェクト A工区", address="東京都渋谷区桜丘町", qr_code_value="site-shibuya-a"),
    Site(id="s2", name="新宿駅西口再開発 B工区", address="東京都新宿区西新宿", qr_code_value="site-shinjuku-b"),
)

DEFAULT_CURRENT_WORKER_ID = "w2"
