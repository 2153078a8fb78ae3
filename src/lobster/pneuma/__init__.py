"""
Pneuma - On-chain encoding layer for Proof of Lobster.

Provides SCALE compact integers, the fixed transaction extension list,
signed extrinsic assembly, and chain event decoding.

Network I/O is left to the services that supply call data and accept
finished extrinsics; everything here is pure.
"""
