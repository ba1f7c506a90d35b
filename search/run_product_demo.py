#!/usr/bin/env python3
"""
Product 인덱스 데모 스크립트

인덱스 생성부터 저장/수정/조회/페이지/term 검색/집계까지 순서대로 실행해 볼 수 있습니다.

    python -m search.run_product_demo create-index
    python -m search.run_product_demo save
    python -m search.run_product_demo page --page 0 --size 5
"""

import argparse
import logging

from domain.product import Product
from repository.product_repository import ProductRepository

from .config import ESConfig
from .connection import check_connection, create_es_client
from .es_client import ESSearchClient
from .es_indices import ESIndexManager
from .query import page_query, term_query, terms_aggregation_query

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

ACTIONS = [
    "create-index", "delete-index", "exists",
    "save", "update", "get", "list", "delete", "save-all",
    "page", "term", "term-page", "agg",
]


def sample_product(product_id: int, title: str, price: float) -> Product:
    return Product(id=product_id, title=title, category="phone", price=price, images="https://example.com/p.png")


def run(action: str, args, cfg: ESConfig) -> None:
    es = create_es_client(cfg)
    if not check_connection(es):
        raise SystemExit(f"Elasticsearch not reachable: {cfg.url}")

    index = cfg.product_index
    manager = ESIndexManager(es)
    repo = ProductRepository(es, index)
    client = ESSearchClient(es)

    try:
        if action == "create-index":
            ok = manager.create_index(
                index, settings=Product.INDEX_SETTINGS, mappings=Product.INDEX_MAPPINGS,
            )
            print(f"Create {index}: {'OK' if ok else 'FAILED'}")

        elif action == "delete-index":
            print(f"Delete {index}: {manager.delete_index(index)}")

        elif action == "exists":
            print(f"Exists {index}: {manager.index_exists(index)}")

        elif action == "save":
            ok = client.upsert_document(sample_product(args.id, "apple phone", 5999.0), index)
            print(f"Save {args.id}: {ok}")

        elif action == "update":
            # 같은 ID로 다시 저장하면 교체
            ok = client.upsert_document(sample_product(args.id, "xiaomi phone", 2999.0), index)
            print(f"Update {args.id}: {ok}")

        elif action == "get":
            print(repo.find_by_id(args.id))

        elif action == "list":
            for product in repo.find_all():
                print(product)

        elif action == "delete":
            print(f"Delete {args.id}: {client.delete_document(args.id, index)}")

        elif action == "save-all":
            products = [sample_product(args.id + i, f"huawei phone {i}", 3999.0) for i in range(args.count)]
            print(f"Bulk save {len(products)}: {client.bulk_upsert(products, index)}")

        elif action == "page":
            body = page_query(None, args.page, args.size, sort=[{"id": "desc"}])
            page = client.search(index, body, Product, args.page, args.size)
            print(f"page={page.page_num}, size={page.page_size}, total={page.total}")
            for product in page.data:
                print(f"  {product}")

        elif action == "term":
            for product in repo.search(term_query("title", args.keyword)):
                print(product)

        elif action == "term-page":
            page = repo.search_page(term_query("title", args.keyword), args.page, args.size)
            print(f"total={page.total}")
            for product in page.data:
                print(f"  {product}")

        elif action == "agg":
            body = terms_aggregation_query("by_price", "price", size=args.size)
            for key, count in sorted(client.agg_search(index, body, "by_price").items()):
                print(f"  {key}: {count}")

    finally:
        es.close()


def main():
    """CLI 진입점"""
    parser = argparse.ArgumentParser(description="Product index demo")
    parser.add_argument("action", choices=ACTIONS)
    parser.add_argument("--id", type=int, default=2, help="Product id")
    parser.add_argument("--count", type=int, default=2, help="Number of products for save-all")
    parser.add_argument("--page", type=int, default=0, help="Page number (0-based)")
    parser.add_argument("--size", type=int, default=5, help="Page size / bucket count")
    parser.add_argument("--keyword", "-k", default="xiaomi", help="Term query keyword")

    args = parser.parse_args()
    run(args.action, args, ESConfig())


if __name__ == "__main__":
    main()
