import unittest

from productcatalog.core.image_urls import (
    PLACEHOLDER_IMAGE_URL,
    fix_image_url,
    get_placeholder_image_url,
    is_valid_image_url,
)


class IsValidImageUrlTests(unittest.TestCase):
    def test_unsplash_photo_url(self):
        self.assertTrue(is_valid_image_url("https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d"))

    def test_unsplash_without_photo_token(self):
        self.assertFalse(is_valid_image_url("https://images.unsplash.com/abcdef"))
        self.assertFalse(is_valid_image_url("https://images.unsplash.com/photo-abc"))

    def test_rejects_malformed_and_non_http(self):
        self.assertFalse(is_valid_image_url("not a url"))
        self.assertFalse(is_valid_image_url("ftp://example.com/a.png"))
        self.assertFalse(is_valid_image_url("https:///a.png"))
        self.assertFalse(is_valid_image_url(""))
        self.assertFalse(is_valid_image_url(None))
        self.assertFalse(is_valid_image_url(42))

    def test_rejects_invalid_port(self):
        self.assertFalse(is_valid_image_url("http://example.com:abc/a.png"))
        self.assertFalse(is_valid_image_url("http://example.com:99999/a.png"))
        self.assertTrue(is_valid_image_url("http://example.com:8080/a.png"))

    def test_image_extension_on_any_host(self):
        self.assertTrue(is_valid_image_url("https://example.com/images/shoe.JPG"))
        self.assertTrue(is_valid_image_url("http://example.com/icon.ico"))
        self.assertTrue(is_valid_image_url("https://example.com/scan.tiff?size=large"))

    def test_unknown_host_without_extension(self):
        self.assertFalse(is_valid_image_url("https://example.com/products/42"))

    def test_known_image_hosts(self):
        self.assertTrue(is_valid_image_url("https://placehold.co/600x400/blue/white?text=Sample"))
        self.assertTrue(is_valid_image_url("https://dummyimage.com/600x400/4338ca/ffffff&text=Product"))
        self.assertTrue(is_valid_image_url("https://picsum.photos/200/300"))
        self.assertTrue(is_valid_image_url("https://res.cloudinary.com/demo/image/upload/sample"))
        self.assertTrue(is_valid_image_url("https://commons.wikimedia.org/wiki/File:Sample.jpg"))

    def test_unsplash_page_host_is_not_subject_to_photo_rule(self):
        self.assertTrue(is_valid_image_url("https://unsplash.com/photos/abc"))


class FixImageUrlTests(unittest.TestCase):
    def test_media_fragment(self):
        url = "https://commons.wikimedia.org/wiki/Category:X#/media/File:Sample.jpg"
        self.assertEqual(fix_image_url(url), "https://upload.wikimedia.org/wikipedia/commons/s/sa/Sample.jpg")

    def test_file_segment(self):
        url = "https://commons.wikimedia.org/wiki/File:Dog.png?uselang=en"
        self.assertEqual(fix_image_url(url), "https://upload.wikimedia.org/wikipedia/commons/d/do/Dog.png")

    def test_percent_encoded_name_is_decoded(self):
        url = "https://commons.wikimedia.org/wiki/Category:Cables#/media/File:Electric_guide_3%C3%972.5_mm.jpg"
        self.assertEqual(
            fix_image_url(url),
            "https://upload.wikimedia.org/wikipedia/commons/e/el/Electric_guide_3×2.5_mm.jpg",
        )

    def test_single_character_name_pads_with_a(self):
        url = "https://commons.wikimedia.org/wiki/File:X"
        self.assertEqual(fix_image_url(url), "https://upload.wikimedia.org/wikipedia/commons/x/xa/X")

    def test_unmatched_urls_are_unchanged(self):
        for url in (
            "https://example.com/a.png",
            "https://commons.wikimedia.org/wiki/Main_Page",
            "not a url",
            "",
        ):
            self.assertEqual(fix_image_url(url), url)
        self.assertIsNone(fix_image_url(None))

    def test_undecodable_name_is_unchanged(self):
        url = "https://commons.wikimedia.org/wiki/File:%FF%FE.jpg"
        self.assertEqual(fix_image_url(url), url)

    def test_idempotent(self):
        for url in (
            "https://commons.wikimedia.org/wiki/Category:X#/media/File:Sample.jpg",
            "https://commons.wikimedia.org/wiki/File:Dog.png",
            "https://example.com/a.png",
        ):
            once = fix_image_url(url)
            self.assertEqual(fix_image_url(once), once)


class PlaceholderTests(unittest.TestCase):
    def test_placeholder(self):
        self.assertEqual(get_placeholder_image_url(), PLACEHOLDER_IMAGE_URL)
        self.assertTrue(is_valid_image_url(get_placeholder_image_url()))


if __name__ == "__main__":
    unittest.main()
