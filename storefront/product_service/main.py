# storefront/product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Catalog Service (dev mock)")


PRODUCTS = {
    1: {
        "id": 1,
        "title": "Backpack",
        "price": 109.95,
        "category": "men's clothing",
        "description": "Fits 15 inch laptops",
        "image": "https://example.com/img/1.jpg",
        "rating": {"rate": 3.9, "count": 120},
    },
    2: {
        "id": 2,
        "title": "Slim Fit T-Shirt",
        "price": 22.3,
        "category": "men's clothing",
        "description": "Slim-fitting style",
        "image": "https://example.com/img/2.jpg",
        "rating": {"rate": 4.1, "count": 259},
    },
    3: {
        "id": 3,
        "title": "Silver Ring",
        "price": 9.99,
        "category": "jewelery",
        "description": "Classic created wedding ring",
        "image": "https://example.com/img/3.jpg",
        "rating": {"rate": 3.0, "count": 400},
    },
    4: {
        "id": 4,
        "title": "USB Flash Drive 64GB",
        "price": 5.0,
        "category": "electronics",
        "description": "USB 3.0 flash drive",
        "image": "https://example.com/img/4.jpg",
        "rating": {"rate": 4.8, "count": 319},
    },
}


@app.get("/products")
def list_products():
    return list(PRODUCTS.values())


@app.get("/products/categories")
def list_categories():
    return sorted({p["category"] for p in PRODUCTS.values()})


@app.get("/products/category/{category}")
def list_products_in_category(category: str):
    return [p for p in PRODUCTS.values() if p["category"] == category]


@app.get("/products/{product_id}")
def get_product(product_id: int):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
