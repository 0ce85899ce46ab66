import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from r85 import R85

# Every byte value, then 0x00 0x01 so that the data does not end on a group boundary
DATA_258 = bytes(i & 0xFF for i in range(0x102))

ENCODED_NO_KEY = (
    '\'K/s!7>k6#G1RO$W$9h%glt+\'"`[D(2SB])BF)!+R9e9,b,LR-rt2k.-hn.0=[UG1MN'
    '<`2]A#$4m4_<5((FU68p,n7Hch19XVOJ:hI6c;#=r&=30Y?>C#@X?Sk&q@c^b4BsQIMC.'
    'E0fD>8l)FN+SBG^s9[HnfusI)Z\\7K9MCPLI@*iMY3f,Oi&MEP$o3^Q4bo!SDUV:TTH=S'
    'Ud;$lVt.`/X/"GHY?j-aZO]i$\\_PP=]oC7V^*7sn_:*Z2aJr@KbZe\'dcjXc\'e%LJ@f5'
    '?1YgE2mqhU%T5jem:Nku`!gl0T]*n@GDCoP:+\\p`-gtqpuM8s"$!'
)

ENCODED_WITH_KEY = (
    'A19R6Jq{](i?+):u:e$-3#^5AUbl}[W7wC0wv065+eneK"K!+Lk^W{aL$paPVlFi?|<jbWC'
    '\\(:g`g\'jD[[vF]dMKpJ%,$?e;o).m$t],O(Vk@VXPYrqc(s;r7{@/s,S"gwRNt|ca~PT}'
    'qd#0v<57wiSRel%pTZRt0&=J1e|cI!tsE8|YXTK)8@|~I:4XSNg"467}Fom__%V7FyO:#o^'
    'ab9;9Ui%YrQLB&)C8:=\'IIVC4cJoSEJRp\'mE&WB.ks1"&nAy,Q;,An-!.sTDr?Y3~W`/$'
    'F-_DQn`m<{Zb63#P_CEpsi}c4Im5=MbL3^/MZ|dRU:6'
)

KEY = "s3cret"


@pytest.fixture
def codec():
    """Codec with the default (unkeyed) alphabet."""
    return R85()


@pytest.fixture
def keyed_codec():
    """Codec with the alphabet derived from KEY."""
    return R85(KEY)


@pytest.fixture(params=[None, "", "s3cret", b"\x00", b"\xff" * 200, "pässwörd"])
def any_key(request):
    """A selection of keys, including absent, empty, binary and over-long ones."""
    return request.param
