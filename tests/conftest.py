"""Shared fixtures: a small two-game server log."""

import pytest

SAMPLE_LOG = r"""  0:00 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\g_gametype\0
 15:00 Exit: Timelimit hit.
 20:34 ClientConnect: 2
 20:34 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\xian/default\hmodel\xian/default\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100\w\0\l\0\tt\0\tl\0
 20:37 ClientBegin: 2
 20:37 ShutdownGame:
 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
 21:07 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
 21:42 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH
 22:10 Item: 2 weapon_rocketlauncher
  0:00 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\g_gametype\0
  0:25 ClientUserinfoChanged: 2 n\Dono\t\0\model\sarge\hmodel\sarge
  0:27 ClientUserinfoChanged: 3 n\Zeh\t\0\model\sarge/default\hmodel\sarge/default
  0:29 ClientUserinfoChanged: 2 n\Dono\t\0\model\sarge\hmodel\sarge
  1:05 Kill: 3 2 10: Zeh killed Dono by MOD_RAILGUN
  1:10 Kill: 1022 3 19: <world> killed Zeh by MOD_FALLING
  1:12 Kill: 2 3 6: Isgalamido killed Zeh by MOD_ROCKET
  1:15 Kill: broken line
"""


@pytest.fixture
def sample_lines():
    """Lines of the two-game sample log."""
    return SAMPLE_LOG.splitlines()


@pytest.fixture
def sample_log_path(tmp_path):
    """The sample log written to disk."""
    path = tmp_path / "games.log"
    path.write_text(SAMPLE_LOG)
    return path
