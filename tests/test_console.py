from webvulns.reporters.console import Log


class TestLog:

    def test_info_respects_verbosity(self, capsys):
        Log(verbose=0).info("hidden")
        Log(verbose=1).info("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[INFO]" in out and "shown" in out

    def test_debug_needs_vv(self, capsys):
        Log(verbose=1).debug("quiet")
        Log(verbose=2).debug("loud")
        out = capsys.readouterr().out
        assert "quiet" not in out
        assert "loud" in out

    def test_fail_and_warn_print_when_quiet(self, capsys):
        log = Log(verbose=0)
        log.fail("nothing found")
        log.warn("no headers")
        out = capsys.readouterr().out
        assert "[FAIL]" in out and "nothing found" in out
        assert "[WARNING]" in out and "no headers" in out

    def test_finding(self, capsys):
        Log().finding("SQLi", "query", "id", "http://x.test/?id=1")
        out = capsys.readouterr().out
        assert "[VULN]" in out
        assert "SQLi" in out
        assert "id" in out
        assert "http://x.test/?id=1" in out
