import pytest

from country_atlas.errors import InvalidInputError
from country_atlas.services import country_service
from country_atlas.utils import image

PLAIN_SVG = '<svg width="30" height="20"><rect width="30" height="20" fill="red"/></svg>'


@pytest.fixture
def india_svg():
    return country_service.get_by_iso2("IN").flag.svg


def test_emoji_conversions():
    assert image.emoji_to_unicode("🇮🇳") == "1F1EE-1F1F3"
    assert image.iso_to_flag_emoji("fr") == "🇫🇷"


def test_flag_sizes():
    assert image.FLAG_SIZES["MEDIUM"] == (64, 48)
    assert image.FLAG_SIZES["BANNER"].width == 800


def test_resize_keeps_viewbox_and_inner_attributes(india_svg):
    resized = image.resize_flag_svg(india_svg, 32, 24)
    assert resized.startswith(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 640 480" width="32" height="24">'
    )
    assert 'stroke-width="8"' in resized
    assert resized.count("<svg") == 1


def test_resize_derives_viewbox_from_size_attributes():
    resized = image.resize_flag_svg(PLAIN_SVG, 60, 40)
    assert 'viewBox="0 0 30 20" width="60" height="40"' in resized
    assert '<rect width="30" height="20" fill="red"/>' in resized


def test_resize_maintain_ratio(india_svg):
    assert 'width="100" height="75"' in image.resize_flag_svg_maintain_ratio(india_svg, 100, 100)
    assert 'width="40" height="30"' in image.resize_flag_svg_maintain_ratio(india_svg, 100, 30)


def test_data_urls():
    assert image.svg_to_data_url('<svg a="b"/>') == "data:image/svg+xml,%3Csvg%20a%3D%22b%22%2F%3E"
    assert image.svg_to_base64_data_url("<svg/>") == "data:image/svg+xml;base64,PHN2Zy8+"


def test_generate_flag_img_tag(india_svg):
    tag = image.generate_flag_img_tag(india_svg, alt="India & co", class_name="flag")
    assert tag.startswith('<img src="data:image/svg+xml,')
    assert 'alt="India &amp; co"' in tag
    assert 'width="64" height="48" class="flag" />' in tag


def test_resize_with_preset(india_svg):
    assert 'width="32" height="24"' in image.resize_flag_with_preset(india_svg, "small")
    with pytest.raises(InvalidInputError) as exc:
        image.resize_flag_with_preset(india_svg, "huge")
    assert exc.value.field == "preset"


def test_apply_flag_filter():
    filtered = image.apply_flag_filter(PLAIN_SVG, grayscale=100, blur=2)
    assert filtered.startswith('<svg style="filter: grayscale(100%) blur(2px);" width="30"')
    assert image.apply_flag_filter(PLAIN_SVG) == PLAIN_SVG


def test_apply_flag_shape():
    circle = image.apply_flag_shape(PLAIN_SVG, "circle", 64)
    assert '<clipPath id="circle-clip"><circle cx="32" cy="32" r="32" /></clipPath>' in circle
    assert 'clip-path="url(#circle-clip)"' in circle
    assert circle.endswith("</g></svg>")

    rounded = image.apply_flag_shape(PLAIN_SVG, "rounded", 64)
    assert 'rx="6.4" ry="6.4"' in rounded

    square = image.apply_flag_shape(PLAIN_SVG, "square", 48)
    assert 'width="48" height="48"' in square

    with pytest.raises(InvalidInputError):
        image.apply_flag_shape(PLAIN_SVG, "hexagon")
