# Copyright 2025 Google LLC
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
# ==============================================================================

import re
import unittest
from datetime import timezone
from unittest.mock import patch

from shared import utils
from shared.constants import AVATAR_COLORS


class UtilsTest(unittest.TestCase):

    def test_generate_id_format(self):
        self.assertRegex(utils.generate_id(), r"^id_\d+_[0-9a-z]{9}$")

    def test_generate_id_is_unique(self):
        ids = {utils.generate_id() for _ in range(1000)}
        self.assertEqual(len(ids), 1000)

    @patch("shared.utils.time.time", return_value=1700000000.5)
    def test_generate_id_embeds_millis(self, _):
        self.assertTrue(utils.generate_id().startswith("id_1700000000500_"))

    def test_generate_initials(self):
        self.assertEqual(utils.generate_initials("Anton Mayer"), "AM")
        self.assertEqual(utils.generate_initials("anja"), "A")
        # At most two letters, taken from the first two words.
        self.assertEqual(utils.generate_initials("Eva Maria Fischer"), "EM")

    def test_generate_avatar_color(self):
        for _ in range(20):
            self.assertIn(utils.generate_avatar_color(), AVATAR_COLORS)

    def test_is_valid_email(self):
        self.assertTrue(utils.is_valid_email("anton@gmail.com"))
        self.assertTrue(utils.is_valid_email("a.b+c@sub.example.org"))
        self.assertFalse(utils.is_valid_email("anton@gmail"))
        self.assertFalse(utils.is_valid_email("anton gmail.com"))
        self.assertFalse(utils.is_valid_email("@gmail.com"))
        self.assertFalse(utils.is_valid_email(""))

    def test_utc_now_iso_round_trips(self):
        value = utils.utc_now_iso()
        self.assertTrue(value.endswith("Z"))
        self.assertTrue(re.search(r"\.\d{6}Z$", value))
        parsed = utils.parse_timestamp(value)
        self.assertEqual(parsed.tzinfo, timezone.utc)

    def test_parse_due_date(self):
        self.assertEqual(str(utils.parse_due_date("2024-02-01")), "2024-02-01")
        self.assertIsNone(utils.parse_due_date("01.02.2024"))
        self.assertIsNone(utils.parse_due_date("2024-02-30"))
        self.assertIsNone(utils.parse_due_date(""))

    def test_parse_timestamp_accepts_millis(self):
        parsed = utils.parse_timestamp("2024-01-01T10:00:00.000Z")
        self.assertEqual((parsed.year, parsed.hour), (2024, 10))
        self.assertLess(parsed, utils.parse_timestamp(utils.utc_now_iso()))


if __name__ == "__main__":
    unittest.main()
