"""
┌──────────────────────────────┐
│     POST /register           │
│  (ninja controller)          │
└──────────────┬───────────────┘
               │
┌──────────────▼───────────────┐
│   Format checks              │
│ - localpart = 0x + 40 hex    │
│ - displayname = label-<sig>  │
└──────────────┬───────────────┘
               │
┌──────────────▼───────────────┐
│   Signature checks           │
│ - password  = sig(address)   │
│ - displayname sig(address)   │
└──────────────┬───────────────┘
               │
┌──────────────▼───────────────┐
│   Registry (accounts table)  │
│ - exists ? -> 409            │
└──────────────┬───────────────┘
               │
┌──────────────▼───────────────┐
│   Homeserver (one POST)      │
│ - failure -> 502             │
│ - success -> insert + relay  │
└──────────────────────────────┘
"""
