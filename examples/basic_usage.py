# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Basic usage of the Marketing Cloud Data Extensions client.

Set MC_ACCESS_KEY and MC_SECRET_KEY (or edit the placeholders below) and replace
the Data Extension keys with real ones before running.
"""

import logging
import sys
from datetime import datetime, timezone

from MarketingCloud.DataExtensions.client import MarketingCloudClient
from MarketingCloud.DataExtensions.core.config import MarketingCloudConfig
from MarketingCloud.DataExtensions.core.errors import AuthError, DataExtensionError, RequestError


def main() -> int:
    logging.basicConfig(level=logging.INFO)

    config = MarketingCloudConfig.from_env()
    client = MarketingCloudClient(
        config.access_key or "YOUR_ACCESS_KEY",
        config.secret_key or "YOUR_SECRET_KEY",
        config=config,
    )
    client.add_data_extension("customers", "CUSTOMERS_DATA_EXTENSION_KEY")
    client.add_data_extension("products", "PRODUCTS_DATA_EXTENSION_KEY")
    print("Registered Data Extensions:", list(client.data_extensions))

    now = datetime.now(timezone.utc).isoformat()
    customers = [
        MarketingCloudClient.create_data_object(
            {"email": "customer@example.com"},
            {"name": "Test Customer", "mobile": "11999999999", "account_type": "f", "created_at": now},
        )
    ]
    products = [
        MarketingCloudClient.create_data_object(
            {"code": "PROD001"},
            {"name": "Test Product", "price": 99.90, "category": "Test", "stock": 100},
        )
    ]

    try:
        print("Insert customers:", client.insert_data(customers, "customers"))
        print("Insert products:", client.insert_data(products, "products"))

        print("Customer:", client.find_by_key("email", "customer@example.com", "customers"))
        print("Products under 100:", client.query_with_odata("price lt 100", {"$orderby": "name asc"}, "products"))

        update = [
            MarketingCloudClient.create_data_object(
                {"email": "customer@example.com"},
                {"mobile": "11888888888", "updated_at": datetime.now(timezone.utc).isoformat()},
            )
        ]
        print("Update customer:", client.update_data(update, "customers"))

        gold = client.query.builder("customers").filter_eq("account_type", "f").top(10).execute()
        print("Builder query:", gold)
    except AuthError as e:
        print(f"Authentication failed ({e.subcode}): {e.message}")
        return 1
    except RequestError as e:
        print(f"Request failed with status {e.status_code}: {e.details}")
        return 1
    except DataExtensionError as e:
        print(f"Client error [{e.code}/{e.subcode}]: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
