import argparse
import json
import sys

from product_catalog import api
from product_catalog.config import config
from product_catalog.db import db
from product_catalog.exceptions import CatalogError
from product_catalog.logging_setup import get_logger, log_exception, logger

log = get_logger('product_catalog.cli')


def init_application(database_url=None):
    """Initialize application components."""
    db.initialize(database_url)
    logger.app_logger.debug(f"Product catalog initialized (config: {config.path})")


def _print(result):
    print(json.dumps(result, indent=2, default=str))


def init_db(args):
    if args.drop:
        log.info("Dropping existing tables...")
        db.drop_all_tables()
    db.create_all_tables()
    log.info("Database tables created successfully.")
    return {'status': 'ok'}


def health(args):
    return api.healthcheck()


def categories(args):
    if args.action == 'list':
        return api.list_categories()
    if args.action == 'create':
        return api.create_category(args.name, args.description)
    api.delete_category(args.id)
    return {'deleted': args.id}


def products(args):
    if args.action == 'list':
        return api.list_products()
    if args.action == 'show':
        return api.get_product(args.id)
    if args.action == 'create':
        return api.create_product(args.name, args.description, args.image_url, args.category_ids)
    api.delete_product(args.id)
    return {'deleted': args.id}


def variations(args):
    if args.action == 'list':
        return api.list_product_variations(args.product_id)
    if args.action == 'create':
        return api.create_product_variation(
            product_id=args.product_id,
            variation_name=args.name,
            unit_price=args.unit_price,
            wholesale_price=args.wholesale_price,
            stock_quantity=args.stock_quantity,
            color=args.color,
            size=args.size,
            material=args.material
        )
    api.delete_product_variation(args.id)
    return {'deleted': args.id}


def build_parser():
    parser = argparse.ArgumentParser(description='Product catalog')
    parser.add_argument('--database-url', help='Override the configured database URL')
    subparsers = parser.add_subparsers(dest='command', required=True)

    init_parser = subparsers.add_parser('init-db', help='Create database tables')
    init_parser.add_argument('--drop', '-d', action='store_true', help='Drop existing tables first')
    init_parser.set_defaults(func=init_db)

    health_parser = subparsers.add_parser('health', help='Check database connectivity')
    health_parser.set_defaults(func=health)

    cat_parser = subparsers.add_parser('categories', help='Manage categories')
    cat_actions = cat_parser.add_subparsers(dest='action', required=True)
    cat_actions.add_parser('list')
    cat_create = cat_actions.add_parser('create')
    cat_create.add_argument('name')
    cat_create.add_argument('--description')
    cat_delete = cat_actions.add_parser('delete')
    cat_delete.add_argument('id', type=int)
    cat_parser.set_defaults(func=categories)

    prod_parser = subparsers.add_parser('products', help='Manage products')
    prod_actions = prod_parser.add_subparsers(dest='action', required=True)
    prod_actions.add_parser('list')
    prod_show = prod_actions.add_parser('show')
    prod_show.add_argument('id', type=int)
    prod_create = prod_actions.add_parser('create')
    prod_create.add_argument('name')
    prod_create.add_argument('--description')
    prod_create.add_argument('--image-url')
    prod_create.add_argument('--category-id', dest='category_ids', type=int, action='append')
    prod_delete = prod_actions.add_parser('delete')
    prod_delete.add_argument('id', type=int)
    prod_parser.set_defaults(func=products)

    var_parser = subparsers.add_parser('variations', help='Manage product variations')
    var_actions = var_parser.add_subparsers(dest='action', required=True)
    var_list = var_actions.add_parser('list')
    var_list.add_argument('product_id', type=int)
    var_create = var_actions.add_parser('create')
    var_create.add_argument('product_id', type=int)
    var_create.add_argument('name')
    var_create.add_argument('--unit-price', required=True)
    var_create.add_argument('--wholesale-price', required=True)
    var_create.add_argument('--stock-quantity', type=int, required=True)
    var_create.add_argument('--color')
    var_create.add_argument('--size')
    var_create.add_argument('--material')
    var_delete = var_actions.add_parser('delete')
    var_delete.add_argument('id', type=int)
    var_parser.set_defaults(func=variations)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    init_application(args.database_url)

    try:
        _print(args.func(args))
    except CatalogError as e:
        log.error(str(e))
        _print(e.to_dict())
        return 1
    except Exception as e:
        log_exception('product_catalog.cli', e, "Unexpected error")
        return 2

    return 0


if __name__ == '__main__':
    sys.exit(main())
