"""Reading and writing INI files through `IniFileHandler`."""

import pytest

from pyinifile import IniDocument, IniFileHandler, MissingSeparator, dump, load


class TestIniFileHandler:
    def test_write_then_read(self, tmp_path):
        path = tmp_path / 'settings.ini'
        doc = IniDocument()
        doc.section('Server')['port'] = 8080
        doc.section('Server')['debug'] = False
        IniFileHandler(path).write(doc)

        assert path.read_bytes() == b'[Server]\nport=8080\ndebug=false\n'
        again = IniFileHandler(path, 'utf-8').read()
        assert again == doc

    def test_settings_forwarded_to_document(self, tmp_path):
        path = tmp_path / 'custom.ini'
        path.write_text('[Foo]\nREM note\nbar: 1\n', encoding='utf-8')
        doc = IniFileHandler(path, 'utf-8', separator=':', comment_prefixes=['REM']).read()
        assert doc['Foo']['bar'].as_int() == 1
        assert doc.separator == ':'

    def test_read_into_existing_instance(self, tmp_path):
        path = tmp_path / 'a.ini'
        path.write_text('[A]\nx;1 ; comment\n', encoding='utf-8')
        doc = IniDocument(separator=';', comment_char='#')
        with pytest.raises(ValueError):
            doc.comment_char = ';'
        IniFileHandler(path, 'utf-8').read(doc)
        assert doc['A']['x'].text == '1 ; comment'

    def test_wrong_encoding_falls_back_to_guess(self, tmp_path):
        path = tmp_path / 'utf8.ini'
        text = '[玩家]\n名字=小明的存档文件\n城市=北京上海广州深圳\n'
        path.write_bytes(text.encode('utf-8'))
        doc = IniFileHandler(path, 'ascii').read()
        assert doc['玩家']['名字'].text == '小明的存档文件'
        assert doc['玩家']['城市'].text == '北京上海广州深圳'

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / 'broken.ini'
        path.write_text('[Foo]\nbar\n', encoding='utf-8')
        with pytest.raises(MissingSeparator):
            load(path, 'utf-8')

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load(tmp_path / 'nope.ini')

    def test_load_dump_shortcuts(self, tmp_path):
        path = tmp_path / 'x.ini'
        doc = IniDocument.loads('[A]\nx=1.5')
        dump(doc, path)
        assert load(path, 'utf-8')['A']['x'].as_float() == 1.5

    def test_str(self, tmp_path):
        handler = IniFileHandler(tmp_path / 'x.ini', 'utf-8')
        assert str(handler).startswith('INI file: ')
        assert str(handler).endswith('(utf-8)')

    def test_load_and_dump_share_utf8_default(self, tmp_path, monkeypatch):
        def no_guessing(raw):
            raise AssertionError('encoding should not need guessing')

        monkeypatch.setattr('pyinifile.parser.chardet.detect', no_guessing)
        path = tmp_path / 'utf8.ini'
        doc = IniDocument()
        doc.section('Città')['nome'] = 'Zürich – ½'
        dump(doc, path)
        assert path.read_bytes().decode('utf-8') == '[Città]\nnome=Zürich – ½\n'
        assert load(path) == doc
