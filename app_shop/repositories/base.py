# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================
# Cada archivo JSON es una "colección" de documentos.
# Toda lectura-modificación-escritura pasa por transaction(), que mantiene
# el lock durante el ciclo completo: así "insertar si no existe" y
# "incrementar o agregar" son atómicos dentro del proceso.
# ==============================================================================

import json
import os
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.
    Proporciona lectura/escritura de archivos JSON con escritura atómica
    (archivo temporal + os.replace) y un lock compartido.
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo con datos vacíos si no existe."""
        with self._file_lock:
            if not os.path.exists(self.file_path):
                self._write_raw(self._empty_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.

        Returns:
            Estructura vacía (dict, list, etc.) según el repositorio
        """

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Raises:
            json.JSONDecodeError: Si el archivo tiene JSON inválido
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON.

        Args:
            data: Datos a serializar y escribir
        """
        with self._file_lock:
            # Escribir a archivo temporal primero para atomicidad
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """
        Lee la colección, la entrega para modificarla y la guarda al salir.

        Si el bloque lanza una excepción no se escribe nada.

        Uso:
            with repo.transaction() as data:
                data[key] = value
        """
        with self._file_lock:
            data = self._read_raw()
            yield data
            self._write_raw(data)


class DocumentRepository(BaseRepository):
    """
    Colección de documentos indexados por ID interno.

    Ejemplo: users.json -> {"3f2a...": {...}, "9b1c...": {...}}
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Dict[str, Any]]:
        """Obtiene todos los documentos {id: documento}."""
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene un documento por su ID.

        Args:
            record_id: ID del documento

        Returns:
            Documento o None si no existe
        """
        return self.get_all().get(str(record_id))

    def find_one(self, field: str, value: Any) -> Optional[tuple]:
        """
        Busca el primer documento cuyo campo coincide.

        Args:
            field: Nombre del campo
            value: Valor exacto a buscar

        Returns:
            Tupla (id, documento) o None
        """
        for record_id, record in self.get_all().items():
            if record.get(field) == value:
                return record_id, record
        return None

    def insert_if_absent(
        self,
        record_id: str,
        record: Dict[str, Any],
        unique_field: str
    ) -> bool:
        """
        Inserta el documento solo si ningún otro tiene el mismo valor
        en unique_field. Comprobación e inserción ocurren bajo el mismo lock.

        Args:
            record_id: ID del nuevo documento
            record: Documento a insertar
            unique_field: Campo que debe ser único

        Returns:
            True si se insertó, False si ya existía el valor
        """
        value = record.get(unique_field)
        with self._file_lock:
            data = self.get_all()
            if any(r.get(unique_field) == value for r in data.values()):
                return False
            data[record_id] = record
            self._write_raw(data)
        return True

    def update_where(
        self,
        field: str,
        value: Any,
        changes: Dict[str, Any]
    ) -> Optional[tuple]:
        """
        Aplica cambios parciales al primer documento que coincide.

        Returns:
            Tupla (id, documento actualizado) o None si no hay coincidencia
        """
        with self._file_lock:
            data = self.get_all()
            for record_id, record in data.items():
                if record.get(field) == value:
                    record.update(changes)
                    self._write_raw(data)
                    return record_id, record
        return None

    def modify(
        self,
        record_id: str,
        mutator: Callable[[Dict[str, Any]], Any]
    ) -> Optional[Any]:
        """
        Ejecuta mutator sobre un documento dentro de una transacción.

        Args:
            record_id: ID del documento
            mutator: Función que modifica el documento en sitio

        Returns:
            Lo que retorne mutator, o None si el documento no existe
        """
        with self._file_lock:
            data = self.get_all()
            record = data.get(str(record_id))
            if record is None:
                return None
            result = mutator(record)
            self._write_raw(data)
            return result

    def delete_where(self, field: str, value: Any) -> Optional[tuple]:
        """
        Elimina el primer documento que coincide.

        Returns:
            Tupla (id, documento eliminado) o None
        """
        with self._file_lock:
            data = self.get_all()
            for record_id, record in data.items():
                if record.get(field) == value:
                    del data[record_id]
                    self._write_raw(data)
                    return record_id, record
        return None


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista.

    Ejemplo: audit.json -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        """Obtiene todos los registros."""
        data = self._read_raw()
        return data if isinstance(data, list) else []

