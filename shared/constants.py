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

# Remote store collections. The local mirrors use the same names as keys.
CONTACTS_COLLECTION = "contacts"
TASKS_COLLECTION = "tasks"
USERS_COLLECTION = "users"
COLLECTIONS = (CONTACTS_COLLECTION, TASKS_COLLECTION, USERS_COLLECTION)

CONNECTED_PATH = ".info/connected"

CURRENT_USER_KEY = "currentUser"

AVATAR_COLORS = (
    "#FF7A00",  # orange
    "#9327FF",  # purple
    "#FF5EB3",  # pink
    "#FFBB2B",  # yellow
    "#1FD7C1",  # teal
    "#462F8A",  # blue
    "#FF3D00",  # red
    "#7AE229",  # green
)

GUEST_USER_ID = "guest"
GUEST_USER_NAME = "Guest User"
GUEST_USER_EMAIL = "guest@join.com"
GUEST_USER_INITIALS = "GU"
GUEST_USER_COLOR = "#FF7A00"

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6
