# Copyright (C) 2018 Tetsuya Miura <miute.dev@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import numpy as np
import pytest

from cssvalues.color import D50, D65
from cssvalues.css.color import ColorMixValue, HSLColorValue, \
    HWBColorValue, LabColorValue, LCHColorValue, ProfiledColorValue, \
    RGBColorValue, interpolate_hue
from cssvalues.css.factory import parse_value
from cssvalues.css.syntax import Match, parse_syntax
from cssvalues.css.types import IdentifierValue, NumberValue, StringValue, \
    Type
from cssvalues.css.units import UnitType
from cssvalues.exception import CSSSyntaxError, InvalidAccessError, \
    InvalidModificationError, InvalidStateError, NoModificationAllowedError, \
    NotSupportedError, TypeMismatchError


def value_of(css_text):
    return parse_value(css_text).value


def test_named_hex_and_rgb_agree():
    keyword = RGBColorValue.from_keyword('red')
    hex_color = value_of('#ff0000')
    function = value_of('rgb(255 0 0)')
    legacy = value_of('rgb(255, 0, 0)')
    percentage = value_of('rgb(100% 0% 0%)')
    expected = keyword.to_xyz()
    for color in (hex_color, function, legacy, percentage):
        assert np.allclose(color.to_xyz(), expected, atol=1e-12)


def test_named_color_stays_an_identifier():
    value = value_of('red')
    assert isinstance(value, IdentifierValue)
    assert value.matches(parse_syntax('<color>')) == Match.TRUE
    assert RGBColorValue.from_keyword('currentcolor') is None
    assert RGBColorValue.from_keyword('nosuchcolor') is None


def test_hex_color():
    color = value_of('#fa08')
    assert isinstance(color, RGBColorValue)
    assert color.tostring() == '#fa08'
    assert color.tolist() == pytest.approx([1.0, 0xaa / 255.0, 0.0])
    assert color.alpha_value() == pytest.approx(0x88 / 255.0)
    with pytest.raises(CSSSyntaxError):
        value_of('#ggg')


def test_rgb_serialization():
    assert value_of('rgb(255 0 0)').tostring() == 'rgb(255 0 0)'
    assert value_of('rgb(255 0 0 / 0.5)').tostring() == 'rgb(255 0 0 / 0.5)'
    assert value_of('rgb(255 0 0 / 0.5)').minified_css_text \
        == 'rgb(255 0 0/.5)'
    assert value_of('rgba(255, 0, 0, 0.5)').tostring() \
        == 'rgba(255, 0, 0, 0.5)'
    assert value_of('rgb(255, 0, 0)').minified_css_text == 'rgb(255,0,0)'


def test_srgb_profile_is_identity():
    color = value_of('color(srgb 0.2 0.4 0.6)')
    assert isinstance(color, ProfiledColorValue)
    assert color.color_space == 'srgb'
    assert color.to_srgb().tolist() == pytest.approx([0.2, 0.4, 0.6])
    assert color.tostring() == 'color(srgb 0.2 0.4 0.6)'


def test_profiled_color_with_alpha():
    color = value_of('color(display-p3 1 0.5 0 / 50%)')
    assert color.alpha_value() == pytest.approx(0.5)
    assert color.tostring() == 'color(display-p3 1 0.5 0 / 50%)'
    assert color.profile.name == 'display-p3'


def test_unknown_color_space():
    color = value_of('color(cmyk 0 0 0)')
    with pytest.raises(NotSupportedError):
        color.to_xyz()


def test_hsl_and_hwb():
    green = value_of('hsl(120 100% 50%)')
    assert isinstance(green, HSLColorValue)
    assert green.to_srgb().tolist() == pytest.approx([0.0, 1.0, 0.0])
    legacy = value_of('hsla(120deg, 100%, 50%, 0.5)')
    assert legacy.legacy
    assert legacy.tostring() == 'hsla(120deg, 100%, 50%, 0.5)'
    gray = value_of('hwb(0 60% 60%)')
    assert isinstance(gray, HWBColorValue)
    assert gray.to_srgb().tolist() == pytest.approx([0.5, 0.5, 0.5])


def test_lab_and_lch():
    white = value_of('lab(100 0 0)')
    assert isinstance(white, LabColorValue)
    assert np.allclose(white.to_xyz(D50), D50, atol=1e-9)
    assert np.allclose(white.to_xyz(D65), D65, atol=1e-9)
    lch = value_of('lch(50 0 0)')
    assert isinstance(lch, LCHColorValue)
    assert np.allclose(lch.to_xyz(), value_of('lab(50 0 0)').to_xyz(),
                       atol=1e-12)
    oklab = value_of('oklab(1 0 0)')
    assert oklab.ok
    assert np.allclose(oklab.to_xyz(), D65, atol=1e-3)
    assert value_of('oklch(0.5 0.1 180deg)').tostring() \
        == 'oklch(0.5 0.1 180deg)'


def test_none_component():
    color = value_of('lch(50 none 120)')
    assert color.components[1].tostring() == 'none'
    assert np.allclose(color.to_xyz(), value_of('lab(50 0 0)').to_xyz(),
                       atol=1e-12)


def test_calculated_component():
    color = value_of('rgb(calc(255 / 5) 0 0)')
    assert color.tolist() == pytest.approx([0.2, 0.0, 0.0])
    color = value_of('rgb(calc(50% + 10%) 0 0)')
    assert color.tolist() == pytest.approx([0.6, 0.0, 0.0])


def test_set_component():
    color = value_of('rgb(255 0 0)')
    color.set_component(2, NumberValue(UnitType.NUMBER, 255))
    assert color.tostring() == 'rgb(255 255 0)'
    with pytest.raises(InvalidAccessError):
        color.set_component(4, NumberValue(UnitType.NUMBER, 0))
    with pytest.raises(TypeMismatchError):
        color.set_component(1, StringValue('red'))
    with pytest.raises(InvalidModificationError):
        color.set_components([NumberValue(UnitType.NUMBER, 0)])


def test_set_component_drops_hex_text():
    color = value_of('#ff0000')
    color.set_alpha(NumberValue(UnitType.NUMBER, 0.5))
    assert color.tostring() == 'rgb(255 0 0 / 0.5)'


def test_subproperty_color():
    color = value_of('rgb(255 0 0)')
    color.subproperty = True
    with pytest.raises(NoModificationAllowedError):
        color.set_component(1, NumberValue(UnitType.NUMBER, 0))
    clone = color.clone()
    clone.set_component(1, NumberValue(UnitType.NUMBER, 0))
    assert clone.tostring() == 'rgb(0 0 0)'
    assert color.tostring() == 'rgb(255 0 0)'


def test_color_matches():
    color = value_of('hsl(0 100% 50%)')
    assert color.primitive_type == Type.COLOR
    assert color.matches(parse_syntax('<color>')) == Match.TRUE
    assert color.matches(parse_syntax('<length>')) == Match.FALSE


@pytest.mark.parametrize('css_text', [
    'rgb(255 0)',
    'rgb(255 0 0 0)',
    'rgb(255 0 0 /)',
    'rgb("a" 0 0)',
    'hwb(0, 0%, 0%)',
    'rgb(255, 0 0)',
    'color(1 0 0)',
])
def test_malformed_color(css_text):
    with pytest.raises(CSSSyntaxError):
        value_of(css_text)


@pytest.mark.parametrize('css_text', [
    'color(srgb 1.5 -0.2 0)',
    'rgb(300 0 0)',
    'hsl(0 150% 50%)',
])
def test_out_of_range_srgb_is_clamped(css_text):
    rgb = value_of(css_text).to_srgb(clamp=True).tolist()
    assert all(0.0 <= x <= 1.0 for x in rgb)
    assert rgb[0] == max(rgb)


def test_out_of_range_srgb_unclamped():
    color = value_of('color(srgb 1.5 -0.2 0 / 0.5)')
    srgb = color.to_srgb(clamp=False)
    assert srgb.tolist() == pytest.approx([1.5, -0.2, 0.0])
    assert srgb.alpha_value() == pytest.approx(0.5)


def test_to_hsl():
    red = RGBColorValue.from_keyword('red').to_hsl()
    assert isinstance(red, HSLColorValue)
    assert [x.value for x in red.components] == pytest.approx([0, 100, 50])
    blue = value_of('#00f').to_hsl()
    assert blue.components[0].value == pytest.approx(240)
    assert blue.to_srgb().tolist() == pytest.approx([0.0, 0.0, 1.0])


def test_to_lab_and_lch():
    white = RGBColorValue.from_keyword('white').to_lab()
    assert isinstance(white, LabColorValue)
    assert not white.ok
    assert [x.value for x in white.components] \
        == pytest.approx([100, 0, 0], abs=1e-2)
    lch = value_of('lab(50 0 20)').to_lch()
    assert isinstance(lch, LCHColorValue)
    assert [x.value for x in lch.components] \
        == pytest.approx([50, 20, 90], abs=1e-6)
    same = value_of('lch(50 30 120)').to_lch()
    assert [x.value for x in same.components] == [50, 30, 120]


def test_to_color_space():
    red = value_of('rgb(255 0 0 / 0.5)')
    p3 = red.to_color_space('display-p3')
    assert isinstance(p3, ProfiledColorValue)
    assert p3.color_space == 'display-p3'
    assert np.allclose(p3.to_xyz(), red.to_xyz(), atol=1e-9)
    assert p3.alpha_value() == pytest.approx(0.5)
    oklch = RGBColorValue.from_keyword('white').to_color_space('oklch')
    assert oklch.ok
    assert oklch.components[0].value == pytest.approx(1.0, abs=1e-3)
    with pytest.raises(NotSupportedError):
        red.to_color_space('cmyk')


def test_delta_e2000():
    red = RGBColorValue.from_keyword('red')
    assert red.delta_e2000(value_of('#ff0000')) == pytest.approx(0, abs=1e-9)
    assert red.delta_e2000(value_of('lab(50 0 0)')) > 10
    assert red.delta_e2000(value_of('color-mix(in srgb, red 100%, blue)')) \
        == pytest.approx(0, abs=1e-9)


def test_color_mix():
    value = value_of('color-mix(in srgb, red, blue)')
    assert isinstance(value, ColorMixValue)
    assert value.primitive_type == Type.COLOR
    assert value.matches(parse_syntax('<color>')) == Match.TRUE
    assert value.color_space == 'srgb'
    assert value.hue_method is None
    assert value.tostring() == 'color-mix(in srgb, red, blue)'
    assert value.minified_css_text == 'color-mix(in srgb,red,blue)'
    mixed = value.mix()
    assert isinstance(mixed, RGBColorValue)
    assert mixed.tolist() == pytest.approx([0.5, 0.0, 0.5])
    assert mixed.alpha_value() == pytest.approx(1.0)
    assert value.to_srgb().tolist() == pytest.approx([0.5, 0.0, 0.5])


@pytest.mark.parametrize('css_text,fractions,rgb,alpha', [
    ('color-mix(in srgb, red 25%, blue)', (0.25, 0.75, 1.0),
     [0.25, 0.0, 0.75], 1.0),
    ('color-mix(in srgb, red, 25% blue)', (0.75, 0.25, 1.0),
     [0.75, 0.0, 0.25], 1.0),
    ('color-mix(in srgb, red 20%, blue 30%)', (0.4, 0.6, 0.5),
     [0.4, 0.0, 0.6], 0.5),
    ('color-mix(in srgb, red 60%, blue 60%)', (0.5, 0.5, 1.0),
     [0.5, 0.0, 0.5], 1.0),
    ('color-mix(in srgb, rgb(255 0 0 / 0), blue)', (0.5, 0.5, 1.0),
     [0.5, 0.0, 0.5], 0.5),
])
def test_color_mix_percentages(css_text, fractions, rgb, alpha):
    value = value_of(css_text)
    assert value.fractions() == pytest.approx(fractions)
    mixed = value.mix()
    assert mixed.tolist() == pytest.approx(rgb)
    assert mixed.alpha_value() == pytest.approx(alpha)


def test_color_mix_percentage_before_color():
    value = value_of('color-mix(in srgb, 25% red, blue)')
    assert value.percent1.value == 25
    assert value.percent2 is None
    assert value.tostring() == 'color-mix(in srgb, red 25%, blue)'


@pytest.mark.parametrize('method,hue', [
    ('shorter', 300),
    ('longer', 120),
    ('increasing', 120),
    ('decreasing', 300),
])
def test_color_mix_hue_methods(method, hue):
    value = value_of('color-mix(in hsl {} hue, red, blue)'.format(method))
    assert value.hue_method == method
    assert value.tostring() \
        == 'color-mix(in hsl {} hue, red, blue)'.format(method)
    mixed = value.mix()
    assert isinstance(mixed, HSLColorValue)
    assert mixed.components[0].value == pytest.approx(hue)


@pytest.mark.parametrize('hue1,hue2,method,expected', [
    (350, 10, None, 0),
    (10, 350, 'shorter', 0),
    (350, 10, 'longer', 180),
    (10, 350, 'increasing', 180),
    (350, 10, 'decreasing', 180),
    (90, 90, 'longer', 270),
])
def test_interpolate_hue(hue1, hue2, method, expected):
    assert interpolate_hue(hue1, hue2, 0.5, method) \
        == pytest.approx(expected)


def test_color_mix_powerless_hue():
    mixed = value_of('color-mix(in hsl, white, blue)').mix()
    assert [x.value for x in mixed.components] \
        == pytest.approx([240, 50, 75])


def test_color_mix_spaces():
    gray = value_of('color-mix(in oklab, black, white)').mix()
    assert isinstance(gray, LabColorValue)
    assert gray.ok
    assert gray.components[0].value == pytest.approx(0.5, abs=1e-3)
    lch = value_of('color-mix(in lch, red, blue)').mix()
    assert isinstance(lch, LCHColorValue)
    p3 = value_of('color-mix(in display-p3, #f00, #00f)').mix()
    assert isinstance(p3, ProfiledColorValue)
    assert p3.color_space == 'display-p3'


def test_nested_color_mix():
    value = value_of(
        'color-mix(in srgb, color-mix(in srgb, red, blue), white)')
    assert isinstance(value.color1, ColorMixValue)
    assert value.mix().tolist() == pytest.approx([0.75, 0.5, 0.75])


def test_color_mix_currentcolor():
    value = value_of('color-mix(in srgb, currentcolor, blue)')
    with pytest.raises(InvalidStateError):
        value.mix()


def test_color_mix_arguments():
    red = RGBColorValue.from_keyword('red')
    with pytest.raises(NotSupportedError):
        ColorMixValue('cmyk', red, red)
    with pytest.raises(TypeMismatchError):
        ColorMixValue('srgb', red, StringValue('blue'))
    with pytest.raises(TypeMismatchError):
        ColorMixValue('srgb', red, red, NumberValue(UnitType.PX, 10))
    value = ColorMixValue('SRGB', red, IdentifierValue('blue'),
                          NumberValue(UnitType.PERCENT, 10))
    assert value.color_space == 'srgb'
    assert value.tostring() == 'color-mix(in srgb, red 10%, blue)'


@pytest.mark.parametrize('css_text', [
    'color-mix(in srgb, red)',
    'color-mix(srgb, red, blue)',
    'color-mix(in cmyk, red, blue)',
    'color-mix(in srgb shorter hue, red, blue)',
    'color-mix(in hsl shorter, red, blue)',
    'color-mix(in hsl sideways hue, red, blue)',
    'color-mix(in srgb, red 0%, blue 0%)',
    'color-mix(in srgb, red 150%, blue)',
    'color-mix(in srgb, red 10% 20%, blue)',
    'color-mix(in srgb, 10px, blue)',
    'color-mix(in srgb, 10%, blue)',
])
def test_malformed_color_mix(css_text):
    with pytest.raises(CSSSyntaxError):
        value_of(css_text)
