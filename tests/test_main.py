import main


def test_unknown_command(capsys):
    assert main.main(['detect']) == -1
    assert 'Usage' in capsys.readouterr().out


def test_dispatches_to_cache(tmp_path, capsys):
    rc = main.main(['cache', '--cache-dir', str(tmp_path / 'none'), '--out-dir', str(tmp_path / 'out')])
    assert rc == 0
    assert 'cache folder not found' in capsys.readouterr().out


def test_dispatches_to_train(capsys):
    assert main.main(['train']) == -1
    assert 'Wrong number of parameters.' in capsys.readouterr().out
