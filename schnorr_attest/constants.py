# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# domain tags
SCH_DOMAIN_TAG = "SCHNORR|SIGNATURE|v1|".encode("utf-8").hex()
CRD_DOMAIN_TAG = "CREDENTIAL|SUBJECT|v1|".encode("utf-8").hex()
EPH_DOMAIN_TAG = "SCHNORR|EPHEMERAL|HKDF|v1|".encode("utf-8").hex()

# fixed widths, in bytes
FIELD_WIDTH = 32
SCALAR_BYTES = 32
DIGEST_SIZE = 32
