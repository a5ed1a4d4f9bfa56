"""
Basic usage example for vectorclient.

Expects a store listening on http://localhost:8080 with an ``Article`` class.
"""

import numpy as np
from vectorclient import Filter, VectorStoreClient, VectorClientError


def main():
    print("=" * 60)
    print("vectorclient Basic Usage Example")
    print("=" * 60)

    # 1. Connect
    print("\n1. Connecting...")
    client = VectorStoreClient.connect("http://localhost:8080")
    print(f"   Ready: {client.is_ready()}")

    articles = client.collection("Article", default_fields=["title", "category"])

    # 2. Create objects
    print("\n2. Creating objects...")
    for i in range(5):
        articles.data().create(
            {
                "title": f"Document {i}",
                "category": ["tutorial", "guide", "reference"][i % 3],
                "year": 2020 + i,
            },
            vector=np.random.randn(128),
        )

    # 3. Filtered query
    print("\n3. Querying...")
    recent = Filter.by_property("year").greater_than_or_equal(2022)
    guides = Filter.by_property("category").contains_any(["guide", "tutorial"])

    for record in articles.query().where(recent & guides).limit(10).fetch_objects():
        print(f"   {record['id']}: {record.get('title')}")

    # 4. Criteria shortcut
    print("\n4. find_one_by...")
    record = articles.find_one_by({"title": "Document 0"})
    print(f"   Found: {record}")

    # 5. Update and delete
    if record is not None:
        print("\n5. Updating and deleting...")
        articles.data().update(record["id"], {"year": 2030})
        print(f"   Deleted: {articles.data().delete(record['id'])}")

    client.close()
    print("\nDone!")


if __name__ == "__main__":
    try:
        main()
    except VectorClientError as e:
        print(e.detailed_message())
