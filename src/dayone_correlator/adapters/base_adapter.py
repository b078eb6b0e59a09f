"""入力ソースアダプタ（基底クラス）.

Day One エントリや Jekyll 投稿を、コアが扱える素朴な形（dict / Post）に変換するための
抽象基底クラスを定義します。
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseAdapter(ABC):
    """入力ソースアダプタの基底クラス.

    全てのアダプタはこのクラスを継承し、read()/validate() を実装します。
    """

    @abstractmethod
    def read(self) -> list[Any]:
        """ソースを読み込み、レコードのリストに変換する.

        Raises:
            FileNotFoundError: ソースが存在しない場合
            ValueError: データ形式が不正な場合
        """
        ...

    @abstractmethod
    def validate(self, records: list[Any]) -> bool:
        """読み込み結果の整合性を検証する."""
        ...
