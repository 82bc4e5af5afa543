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


from .adaptation import adapt, chromatic_adaptation_matrix
from .gamut import clamp_rgb, range_round_check
from .illuminant import D50, D65, xy_to_xyz
from .lab import delta_e2000, lab_to_lch, lab_to_xyz_d50, lch_to_lab, \
    oklab_to_xyz_d65, xyz_d50_to_lab, xyz_d65_to_oklab
from .profile import A98_RGB, DISPLAY_P3, PROPHOTO_RGB, REC2020, SRGB, \
    SRGB_LINEAR, XYZ_D50, XYZ_D65, ColorProfile, get_profile, profile_names
