import unittest
from datetime import datetime, timezone

from productcatalog.core.image_urls import PLACEHOLDER_IMAGE_URL
from productcatalog.core.models import FORM_ERROR_KEY, ActionResult, Product


class ProductTests(unittest.TestCase):
    def test_from_document_defaults(self):
        product = Product.from_document("abc", {"price": "12"})
        self.assertEqual(product.id, "abc")
        self.assertEqual(product.name, "")
        self.assertEqual(product.display_name, "Unnamed Product")
        self.assertEqual(product.to_dict()["name"], "Unnamed Product")
        self.assertEqual(product.description, "No description available.")
        self.assertEqual(product.price, 0.0)
        self.assertEqual(product.image_url, "")
        self.assertIsNotNone(product.created_at)
        self.assertEqual(product.display_image_url, PLACEHOLDER_IMAGE_URL)

    def test_created_at_formats(self):
        expected = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
        for raw in (
            expected,
            "2026-10-19T08:30:00.000Z",
            {"seconds": expected.timestamp(), "nanoseconds": 0},
        ):
            with self.subTest(raw=raw):
                product = Product.from_document("id", {"createdAt": raw})
                self.assertEqual(product.created_at, expected)

    def test_display_helpers(self):
        product = Product.from_document(
            "id",
            {
                "name": "Kettle",
                "price": 24.5,
                "imageUrl": "https://example.com/k.png",
                "createdAt": datetime(2026, 10, 9, tzinfo=timezone.utc),
            },
        )
        self.assertEqual(product.display_price, "24.50")
        self.assertEqual(product.display_image_url, "https://example.com/k.png")
        self.assertEqual(product.display_date, "Oct 9, 2026")
        data = product.to_dict()
        self.assertEqual(data["imageUrl"], "https://example.com/k.png")
        self.assertEqual(data["createdAt"], "2026-10-09T00:00:00+00:00")

    def test_unknown_date(self):
        product = Product("id", "Kettle", "A kettle for tea.", 1.0, "", None)
        self.assertEqual(product.display_date, "Date not available")
        self.assertIsNone(product.to_dict()["createdAt"])


class ActionResultTests(unittest.TestCase):
    def test_form_error(self):
        result = ActionResult.form_error("Boom")
        self.assertFalse(result.success)
        self.assertEqual(result.errors, {FORM_ERROR_KEY: ["Boom"]})
        self.assertEqual(result.to_dict()["code"], "storage_error")


if __name__ == "__main__":
    unittest.main()
